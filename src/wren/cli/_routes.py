"""``wren routes`` and ``wren check`` — inspect the static route table."""

import argparse
import sys

from wren.app import App
from wren.cli._resolve import apply_log_level, resolve_app
from wren.errors import ConfigurationError, InvalidStateError


def _load(args: argparse.Namespace) -> App:
    try:
        app = resolve_app(args.app)
    except ConfigurationError as exc:
        # Raised while the module registered its routes
        print(f"Configuration error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    apply_log_level(app, args.log_level)
    return app


def run_routes(args: argparse.Namespace) -> None:
    """Print the static routes of an app in registration (priority) order."""
    app = _load(args)
    routes = app.routes.routes
    if not routes:
        print("No static routes registered.")
        return

    rows = [
        (route.request_path or "(root)", str(route.resolve_path), route.header or "")
        for route in routes
    ]
    width_path = max(4, *(len(r[0]) for r in rows))
    width_file = max(4, *(len(r[1]) for r in rows))

    fmt = f"{{:<{width_path}}}  {{:<{width_file}}}  {{}}"
    print(fmt.format("PATH", "FILE", "HEADER"))
    print("-" * min(width_path + width_file + 10, 80))
    for path, file, header in rows:
        print(fmt.format(path, file, header))


def run_check(args: argparse.Namespace) -> None:
    """Freeze the app, re-check every route's file, report shadowed duplicates.

    Exits 1 if freezing fails or any file has disappeared since registration.
    """
    app = _load(args)
    try:
        app._ensure_frozen()
    except (ConfigurationError, InvalidStateError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    errors = 0
    seen: set[str] = set()
    for route in app.routes:
        if not route.resolve_path.is_file():
            print(f"  x {route.request_path!r}: missing file {route.resolve_path}")
            errors += 1
        if route.request_path in seen:
            print(f"  ! {route.request_path!r}: shadowed by an earlier route -> {route.resolve_path}")
        seen.add(route.request_path)

    total = len(app.routes)
    if errors:
        print(f"{errors} of {total} route(s) failed.", file=sys.stderr)
        raise SystemExit(1)
    print(f"{total} route(s) OK.")
