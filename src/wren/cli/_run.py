"""``wren run`` — development server command."""

import argparse
import sys

from wren.cli._resolve import apply_log_level, resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it with pounce."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    apply_log_level(app, args.log_level)
    app.run(host=args.host, port=args.port)
