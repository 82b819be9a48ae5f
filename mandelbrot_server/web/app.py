"""
HTTP service for Mandelbrot renders.

Serves an index page and `/mandelbrot.png?b=<w>x<h>&u=<re>,<im>&l=<re>,<im>`.
Parameter problems produce 400 responses before any rendering starts.
"""

import logging
import time
from typing import Optional

from flask import Flask, Response, g, request

from ..api import render_png
from ..core.parsing import parse_bounds, parse_complex
from ..errors import EncodingError, InvalidParameter, RenderError, RenderTimeout
from ..io.config import ServerConfig

logger = logging.getLogger(__name__)

INDEX_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Mandelbrot</title>
</head>
<body>
    <img src="/mandelbrot.png?b=1000x750&u=-1.20,0.35&l=-1,0.20" height="750" width="1000"/>
</body>
</html>
"""


def _text(message: str, status: int) -> Response:
    return Response(message + "\n", status=status, mimetype="text/plain")


def _required(name: str) -> str:
    value = request.args.get(name)
    if value is None:
        raise InvalidParameter(f"missing the '{name}' parameter", name)
    return value


def parse_render_request():
    """
    Read bounds and window from the query string.

    Returns:
        Tuple of (bounds, upper_left, lower_right)

    Raises:
        InvalidParameter: A parameter is missing or malformed
    """
    bounds = parse_bounds(_required('b'))
    if bounds is None:
        raise InvalidParameter("misformatted bounds", 'b')

    lower_right = parse_complex(_required('l'))
    if lower_right is None:
        raise InvalidParameter("misformatted lower right", 'l')

    upper_left = parse_complex(_required('u'))
    if upper_left is None:
        raise InvalidParameter("misformatted upper left", 'u')

    return bounds, upper_left, lower_right


def create_app(config: Optional[ServerConfig] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        config: Server configuration (uses defaults if None)
    """
    config = config or ServerConfig()
    config.validate()

    app = Flask(__name__)
    app.config["SERVER"] = config

    @app.before_request
    def start_timer():
        g.start_time = time.time()

    @app.after_request
    def log_request(response):
        elapsed = time.time() - g.get("start_time", time.time())
        logger.info(f"{request.method} {request.full_path.rstrip('?')} "
                    f"{response.status_code} {elapsed * 1000:.1f}ms")
        return response

    @app.route("/")
    def index():
        return Response(INDEX_PAGE, mimetype="text/html")

    @app.route("/mandelbrot.png")
    def mandelbrot_image():
        try:
            bounds, upper_left, lower_right = parse_render_request()
            data = render_png(bounds, upper_left, lower_right, config.render)
        except InvalidParameter as e:
            return _text(e.message, 400)
        except RenderTimeout as e:
            return _text(str(e), 503)
        except EncodingError as e:
            logger.error(f"PNG encoding failed: {e}")
            return _text(f"failed to encode png: {e}", 500)
        except RenderError as e:
            return _text(f"render failed: {e}", 500)

        return Response(data, mimetype="image/png")

    return app
