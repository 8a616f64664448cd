"""cookbook-upload CLI - Main commands."""
import logging
from pathlib import Path
from typing import Optional

import requests
import typer
from rich.console import Console

app = typer.Typer(
    name="cookbook-upload",
    help="Share cookbooks with a cookbook site",
    add_completion=False
)
console = Console()

DEFAULT_SITE = "https://supermarket.chef.io"


def build_config(
    ssl_verify_mode: str,
    ssl_ca_file: Optional[Path],
    timeout: Optional[float],
    verbose: bool = False
):
    """Build uploader configuration from command line options."""
    from cookbook_uploader import UploaderConfig, SSLConfig
    
    return UploaderConfig(
        ssl=SSLConfig(
            verify_mode=ssl_verify_mode,
            ca_file=str(ssl_ca_file) if ssl_ca_file else None
        ),
        timeout=timeout,
        log_level=logging.DEBUG if verbose else logging.INFO
    )


def load_cookbook(cookbook_dir: Path, name: Optional[str]):
    from cookbook_uploader import CookbookFileTree
    
    try:
        return CookbookFileTree.from_directory(cookbook_dir, name=name)
    except (NotADirectoryError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


@app.command()
def share(
    cookbook_dir: Path = typer.Argument(..., help="Cookbook directory"),
    category: str = typer.Argument(..., help="Site category"),
    user: str = typer.Option(..., "--user", "-u", help="Site user name"),
    key: Path = typer.Option(..., "--key", "-k", help="Private key (PEM)"),
    site: str = typer.Option(DEFAULT_SITE, "--site", "-s", help="Cookbook site URL"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Cookbook name (default: directory name)"),
    ssl_verify_mode: str = typer.Option("verify_peer", "--ssl-verify-mode", help="verify_peer or verify_none"),
    ssl_ca_file: Optional[Path] = typer.Option(
        None, "--ssl-ca-file", exists=True, dir_okay=False, help="Extra trusted CA certificate"
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
):
    """Upload a cookbook to the site."""
    from cookbook_uploader import CookbookSiteUploader, UploaderException, setup_logging
    
    try:
        config = build_config(ssl_verify_mode, ssl_ca_file, timeout, verbose)
    except UploaderException as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    
    if verbose:
        logging.basicConfig(level=config.log_level)
    setup_logging(config.log_level)
    
    cookbook = load_cookbook(cookbook_dir, name)
    uploader = CookbookSiteUploader(config)
    
    try:
        with console.status(f"Uploading {cookbook.name}..."):
            response = uploader.share(cookbook, category, site, user, key)
    except UploaderException as e:
        console.print(f"[red]Share failed: {e}[/red]")
        raise typer.Exit(1)
    except requests.RequestException as e:
        console.print(f"[red]Connection failed: {e}[/red]")
        raise typer.Exit(1)
    except (ValueError, TypeError) as e:
        console.print(f"[red]Invalid private key {key}: {e}[/red]")
        raise typer.Exit(1)
    
    if response.ok:
        console.print(f"[green]Uploaded {cookbook.name} (HTTP {response.status_code})[/green]")
    else:
        console.print(f"[red]Upload failed: HTTP {response.status_code}[/red]")
    if response.text:
        console.print(response.text, markup=False)
    if not response.ok:
        raise typer.Exit(1)


@app.command()
def stage(
    cookbook_dir: Path = typer.Argument(..., help="Cookbook directory"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Cookbook name (default: directory name)"),
):
    """Copy a cookbook into a temporary build directory."""
    from cookbook_uploader import BuildDirectoryAssembler, AssemblyError
    
    cookbook = load_cookbook(cookbook_dir, name)
    
    try:
        staging_dir = BuildDirectoryAssembler().assemble(cookbook)
    except AssemblyError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    
    console.print(f"Staged {len(cookbook)} files at: {staging_dir}")


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
