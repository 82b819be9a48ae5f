"""
Command-line interface for the Mandelbrot server.

Provides commands to run the HTTP service and to render a single image to a
PNG file.
"""

import logging
import sys
import time
from pathlib import Path

import click

from .. import __version__
from ..api import render
from ..core.parsing import parse_bounds, parse_complex
from ..errors import InvalidParameter, MandelbrotError
from ..io.config import load_config
from ..rendering.image_output import RenderMetadata, save_png

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--config', type=click.Path(exists=True), help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress most output')
@click.pass_context
def main(ctx, version, config, verbose, quiet):
    """
    Mandelbrot Server - grayscale Mandelbrot renders over HTTP.
    """
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        logging.basicConfig(level=logging.INFO,
                            format='%(levelname)s: %(message)s')

    if version:
        click.echo(f"Mandelbrot Server v{__version__}")
        click.echo(f"Python: {sys.version}")
        if ctx.invoked_subcommand is None:
            sys.exit(0)

    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config
    ctx.obj['verbose'] = verbose


def _load(ctx):
    try:
        return load_config(ctx.obj.get('config_file'))
    except MandelbrotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option('--host', help='Interface to bind')
@click.option('--port', type=int, help='Port to listen on')
@click.option('--workers', type=int, help='Bands rendered in parallel per request')
@click.option('--timeout', type=float, help='Render timeout in seconds')
@click.pass_context
def serve(ctx, host, port, workers, timeout):
    """Run the HTTP service."""
    from ..web.app import create_app

    server_config = _load(ctx)
    if host:
        server_config.host = host
    if port:
        server_config.port = port
    if workers is not None:
        server_config.render.workers = workers
    if timeout is not None:
        server_config.render.timeout = timeout

    try:
        app = create_app(server_config)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    logger.debug(f"Server configuration: {server_config.to_dict()}")
    click.echo(f"Serving on http://{server_config.host}:{server_config.port}/...")
    app.run(host=server_config.host, port=server_config.port, threaded=True)


@main.command(name='render')
@click.argument('output', type=click.Path())
@click.option('--bounds', '-b', required=True, help='Image size "WIDTHxHEIGHT"')
@click.option('--upper-left', '-u', required=True, help='Upper-left corner "real,imag"')
@click.option('--lower-right', '-l', required=True, help='Lower-right corner "real,imag"')
@click.option('--workers', type=int, help='Bands rendered in parallel')
@click.pass_context
def render_command(ctx, output, bounds, upper_left, lower_right, workers):
    """
    Render a single image to a PNG file.

    OUTPUT: Output image file path
    """
    render_config = _load(ctx).render
    if workers is not None:
        render_config.workers = workers

    try:
        size = parse_bounds(bounds)
        if size is None:
            raise InvalidParameter("misformatted bounds", 'b')
        corner_ul = parse_complex(upper_left)
        if corner_ul is None:
            raise InvalidParameter("misformatted upper left", 'u')
        corner_lr = parse_complex(lower_right)
        if corner_lr is None:
            raise InvalidParameter("misformatted lower right", 'l')

        start_time = time.time()
        pixels = render(size, corner_ul, corner_lr, render_config)
        render_time = time.time() - start_time

        metadata = RenderMetadata(size, corner_ul, corner_lr, render_config.workers, render_time)
        save_png(pixels, size, Path(output), metadata)

    except (MandelbrotError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        if ctx.obj.get('verbose'):
            import traceback
            traceback.print_exc()
        sys.exit(1)

    click.echo(f"Render complete: {render_time:.2f}s")
    click.echo(f"Saved: {output}")


if __name__ == '__main__':
    main()
