"""Development server.

Starts a pounce ASGI server with the live wren App object.
"""


def run_dev_server(app: object, host: str, port: int, *, reload: bool = False) -> None:
    """Start a pounce server with the given wren App.

    Pounce's ``run()`` takes an import string, but wren has a live
    ``App`` object, so ``pounce.Server`` is used directly with the ASGI
    callable.

    Args:
        app: ASGI callable (wren App instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    server = Server(config, app)
    server.run()
