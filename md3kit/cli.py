"""
md3kit CLI - Command-line interface for inspecting and baking MD3 models
"""

import click
import json
import logging
import sys
from md3kit.client import DEFAULT_MAX_TEXTURE_SIZE, ModelFile
from md3kit.animation.exceptions import AnimationError
from md3kit.format.exceptions import MD3Error
from md3kit.format.names import name_to_str


def _parse_surface(value):
    """Surface keys are indices when numeric, names otherwise"""
    if value is None:
        return 0
    return int(value) if value.isdigit() else value


def _fail(label, error, verbose=False):
    click.secho(f"{label}: {error}", fg='red', err=True)
    if verbose:
        import traceback
        traceback.print_exc()
    sys.exit(1)


@click.group()
@click.version_option(package_name='md3kit')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, verbose):
    """
    md3kit - Decode MD3 models and bake vertex animation textures.

    Examples:
        md3kit info upper.md3
        md3kit bake upper.md3 torso.anim --surface u_torso
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')


@cli.command()
@click.argument('model_path')
@click.option('--json', 'as_json', is_flag=True, help='Print the summary as JSON')
@click.pass_context
def info(ctx, model_path, as_json):
    """
    Show frames, tags and surfaces of a model.

    Examples:
        md3kit info head.md3
        md3kit info head.md3 --json
    """
    verbose = ctx.obj.get('verbose', False)
    try:
        mf = ModelFile.open(model_path)
        summary = mf.summary()

        if as_json:
            click.echo(json.dumps(summary.model_dump(), indent=2))
            return

        click.echo(f"Model: {summary.name} (version {summary.version})")
        click.echo(f"  Frames: {len(summary.frames)}  Max radius: {summary.max_radius:.3f}")
        click.echo(f"  Tags: {', '.join(t.name for t in summary.tags) or '-'}")
        click.echo(f"  Surfaces: {len(summary.surfaces)}")
        for i, surf in enumerate(summary.surfaces):
            click.echo(
                f"    [{i}] {surf.name}: {surf.vertices} verts, "
                f"{surf.triangles} tris, {surf.frames} frames"
            )
            for shader in surf.shaders:
                click.echo(f"        shader: {shader}")

    except FileNotFoundError as e:
        _fail("Error", e)
    except MD3Error as e:
        _fail("Invalid MD3", e, verbose)
    except Exception as e:
        _fail("Unexpected error", e, verbose)


@cli.command()
@click.argument('model_path')
@click.argument('output_path')
@click.option('--surface', '-s', default=None, help='Surface index or name (default: 0)')
@click.option('--max-size', type=int, default=DEFAULT_MAX_TEXTURE_SIZE, envvar='MD3KIT_MAX_TEXTURE_SIZE',
              show_default=True, help='Maximum texture dimension of the target GPU')
@click.option('--workers', type=int, default=None, envvar='MD3KIT_WORKERS',
              help='Threads used to pack frames')
@click.pass_context
def bake(ctx, model_path, output_path, surface, max_size, workers):
    """
    Bake a surface's animation into a raw int32 RGBA grid.

    Writes OUTPUT_PATH (raw texel bytes) and a .json sidecar describing it.

    Examples:
        md3kit bake upper.md3 torso.anim --surface u_torso
        md3kit bake lower.md3 legs.anim --max-size 4096
    """
    verbose = ctx.obj.get('verbose', False)
    try:
        mf = ModelFile.open(model_path)
        key = _parse_surface(surface)
        grid = mf.save_animation(key, output_path, max_size=max_size, workers=workers)
        click.secho(
            f"✓ Baked {name_to_str(mf.surface(key).name)} to {output_path} "
            f"({grid.width}x{grid.height}, {grid.rows_per_frame} rows/frame)",
            fg='green',
        )

    except FileNotFoundError as e:
        _fail("Error", e)
    except KeyError as e:
        _fail("Error", e.args[0] if e.args else e)
    except MD3Error as e:
        _fail("Invalid MD3", e, verbose)
    except AnimationError as e:
        _fail("Animation error", e, verbose)
    except ValueError as e:
        _fail("Error", e)
    except Exception as e:
        _fail("Unexpected error", e, verbose)


@cli.command()
@click.argument('model_path')
@click.argument('output_path')
@click.option('--surface', '-s', default=None, help='Surface index or name (default: 0)')
@click.option('--width', type=int, default=None, help='Grid width (default: vertex count)')
@click.option('--scale', type=int, default=1, show_default=True, help='Nearest-neighbour upscale factor')
@click.pass_context
def preview(ctx, model_path, output_path, surface, width, scale):
    """
    Save a PNG preview of a surface's packed animation.

    Examples:
        md3kit preview head.md3 head.png --scale 4
    """
    verbose = ctx.obj.get('verbose', False)
    try:
        mf = ModelFile.open(model_path)
        grid = mf.save_preview(_parse_surface(surface), output_path, width=width, scale=scale)
        click.secho(f"✓ Preview saved to {output_path} ({grid.width}x{grid.height})", fg='green')

    except FileNotFoundError as e:
        _fail("Error", e)
    except KeyError as e:
        _fail("Error", e.args[0] if e.args else e)
    except MD3Error as e:
        _fail("Invalid MD3", e, verbose)
    except AnimationError as e:
        _fail("Animation error", e, verbose)
    except ValueError as e:
        _fail("Error", e)
    except Exception as e:
        _fail("Unexpected error", e, verbose)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
