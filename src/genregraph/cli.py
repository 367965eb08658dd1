from __future__ import annotations

import http.server
import json
import os
import shutil
import socketserver
import tempfile
import webbrowser
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.markup import escape

from .collect.genres import build_document, generate_demo_document, load_genre_records
from .config import load_config
from .encoding import LEGEND_LABELS, edge_color, edge_hex
from .model import Document, RelationshipType
from .render import load_dataset, renderable_document
from .truncate import TruncationSlot
from .wikitext import inner_text, parse_and_simplify


app = typer.Typer(add_completion=False, no_args_is_help=True, help="genregraph CLI")


def _ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


@app.command()
def build(
    genres: Optional[Path] = typer.Option(
        None, help="Directory of processed genre records (<page>.toml)"
    ),
    out: Path = typer.Option(Path("data.json"), help="Output path for the graph dataset JSON"),
    demo: bool = typer.Option(
        False, "--demo", help="Write the built-in demo graph instead of reading genre records"
    ),
    dump_date: Optional[str] = typer.Option(None, help="Date of the source dump, recorded in the output"),
) -> None:
    """Build the graph dataset JSON from genre records."""

    if demo:
        doc: Document = generate_demo_document()
        print("[yellow]Generated demo graph[/yellow]")
    else:
        if genres is None or not genres.is_dir():
            print("[red]Pass --genres DIR pointing at genre records, or use --demo.[/red]")
            raise typer.Exit(code=2)
        doc = build_document(load_genre_records(genres), dump_date=dump_date)

    _ensure_parent_dir(out)
    with out.open("w", encoding="utf-8") as f:
        json.dump(doc, f, indent=2)
    print(
        f"[green]Wrote graph to[/green] {out} "
        f"({len(doc['nodes'])} nodes, {len(doc['links'])} links, max degree {doc['max_degree']})"
    )


@app.command()
def serve(
    data: Optional[str] = typer.Option(
        None, help="Path or URL of a dataset JSON produced by 'genregraph build'"
    ),
    port: Optional[int] = typer.Option(None, help="Port for the local viewer web server"),
    open_browser: bool = typer.Option(True, help="Open browser after server starts"),
) -> None:
    """Serve the graph viewer for a dataset using a local HTTP server."""
    config = load_config()
    data = data or config.data
    port = config.port if port is None else port

    viewer_dir = Path(__file__).resolve().parent.parent.parent / "viewer"
    if not viewer_dir.exists():
        print(f"[red]Viewer assets not found at {viewer_dir}[/red]")
        raise typer.Exit(code=1)

    result = load_dataset(data)
    if not result.ok:
        print(f"[red]{escape(result.error or '')}[/red]")
        print("[yellow]Serving an empty graph[/yellow]")
    doc = renderable_document(result.dataset, base_size=config.base_size, error=result.error)

    # Create a temporary directory containing viewer + data.json
    with tempfile.TemporaryDirectory(prefix="genregraph-view-") as tmpdir:
        tmp_path = Path(tmpdir)
        for item in viewer_dir.iterdir():
            dest = tmp_path / item.name
            if item.is_dir():
                shutil.copytree(item, dest)
            else:
                shutil.copy2(item, dest)
        with (tmp_path / "data.json").open("w", encoding="utf-8") as f:
            json.dump(doc, f)

        os.chdir(tmp_path)
        handler = http.server.SimpleHTTPRequestHandler
        # Reusable server to avoid TIME_WAIT issues after Ctrl-C
        class ReusableTCPServer(socketserver.TCPServer):
            allow_reuse_address = True

        try:
            httpd = ReusableTCPServer(("127.0.0.1", port), handler)
        except OSError as ex:
            print(f"[red]Failed to start server on port {port}: {ex}[/red]")
            raise typer.Exit(code=3)

        try:
            actual_port = httpd.server_address[1]
            url = f"http://127.0.0.1:{actual_port}/index.html"
            print(f"[green]Serving viewer at[/green] {url}")
            if open_browser:
                webbrowser.open_new_tab(url)
            httpd.serve_forever()
        except KeyboardInterrupt:
            print("\n[cyan]Shutting down viewer server[/cyan]")
        finally:
            httpd.shutdown()
            httpd.server_close()


@app.command()
def describe(
    node_id: str = typer.Argument(..., help="Id of the genre node"),
    data: Optional[str] = typer.Option(None, help="Path or URL of the dataset JSON"),
    full: bool = typer.Option(False, "--full/--short", help="Show the whole description"),
) -> None:
    """Print a genre's description, cut at its first line break unless --full."""
    data = data or load_config().data

    result = load_dataset(data)
    if not result.ok:
        print(f"[red]{escape(result.error or '')}[/red]")
        raise typer.Exit(code=2)

    node = result.dataset.nodes.get(node_id)
    if node is None:
        print(f"[red]No node with id[/red] {escape(node_id)}")
        raise typer.Exit(code=1)

    print(f"[bold]{escape(node.label)}[/bold]")
    if not node.description:
        print("[dim]No description[/dim]")
        return

    slot = TruncationSlot(expandable=True)
    view = slot.bind(node.id, parse_and_simplify(node.description))
    if full:
        view = slot.toggle()
    print(escape(inner_text(view.visible)))
    if slot.label is not None:
        hint = "--short" if slot.state.expanded else "--full"
        print(f"[dim]{slot.label} ({hint})[/dim]")


@app.command()
def legend() -> None:
    """Print the colors used for each relationship type."""
    for ty in RelationshipType:
        print(f"[{edge_hex(ty)}]■[/] {LEGEND_LABELS[ty]}  [dim]{edge_color(ty)}[/dim]")


if __name__ == "__main__":
    app()
