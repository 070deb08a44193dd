"""tmplpack CLI - Main entry point."""
import typer

from tmplpack import __version__

from . import generate_cmd

app = typer.Typer(
    name="tmplpack",
    help="tmplpack CLI - Embed template trees into generated Python modules",
    no_args_is_help=True,
    add_completion=False,
)

# Register all commands
app.command()(generate_cmd.generate)
app.command()(generate_cmd.inspect)


@app.command()
def version():
    """Show the tmplpack version."""
    typer.echo(f"tmplpack {__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
