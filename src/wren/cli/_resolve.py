"""App import resolution — resolves ``"module:attribute"`` strings to App instances.

Shared by ``wren routes``, ``wren check`` and ``wren run``.
"""

import importlib

from wren.app import App
from wren.log import configure_logging


def resolve_app(import_string: str) -> App:
    """Resolve an import string to a wren App instance.

    Accepts ``"module:attribute"`` format. When the attribute portion
    is omitted, defaults to ``"app"``. If the resolved object is callable
    and not an App, it is called as a factory.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a wren ``App`` or the
            factory fails.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a wren.App instance"
        raise TypeError(msg)

    return obj


def apply_log_level(app: App, requested: str | None) -> None:
    """Set the wren log level: ``--log-level`` if given, else ``app.config.log_level``."""
    configure_logging(requested or app.config.log_level)
