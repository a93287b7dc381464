import json
import logging
import logging.config
from pathlib import Path
from typing import Optional

import typer

from docfeed.errors import DocfeedError
from docfeed.models.config import DEFAULT_SOURCES
from docfeed.services.generator import generate
from docfeed.services.renderer import render
from docfeed.services.site import CONFIG_FILENAME, load_config, load_pages


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
        }
    )


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="docfeed",
    help="Build search document feeds from static-site pages and render search hits.",
    add_completion=False,
)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level.")) -> None:
    configure_logging("DEBUG" if verbose else "INFO")


@app.command()
def build(
    source: Path = typer.Argument(..., help="Site source directory."),
    config: Optional[Path] = typer.Option(
        None, help=f"Site configuration file (default: SOURCE/{CONFIG_FILENAME})."
    ),
    namespace: Optional[str] = typer.Option(None, help="Override search.namespace."),
    output_dir: Path = typer.Option(Path("."), help="Directory the feed is written to."),
) -> None:
    """Extract every indexable page under SOURCE into <namespace>_index.json."""
    config_path = config or source / CONFIG_FILENAME
    try:
        site_config = load_config(config_path, namespace=namespace)
        pages = load_pages(source, exclude=site_config.exclude)
        target = generate(pages, site_config.search.namespace, output_dir=output_dir)
    except (DocfeedError, OSError) as exc:
        logger.error("Feed build failed: %s", exc)
        raise typer.Exit(code=1)

    typer.echo(str(target))


@app.command("render")
def render_hits(
    hits_file: Path = typer.Argument(..., help="JSON file with search hits."),
    config: Optional[Path] = typer.Option(None, help="Site configuration with search.sources."),
    output: Optional[Path] = typer.Option(None, help="Write the HTML here instead of stdout."),
) -> None:
    """Render search hits from HITS_FILE as an HTML result list."""
    sources = DEFAULT_SOURCES
    try:
        if config is not None:
            sources = load_config(config).search.source_table()
        with open(hits_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        # Accept a raw backend response as well as a bare list of hits
        if isinstance(data, dict):
            root = data.get("root", {})
            if not isinstance(root, dict):
                raise ValueError("root must be an object.")
            data = root.get("children", [])
        if not isinstance(data, list):
            raise ValueError("Expected a list of hits.")
        results = render(data, sources)
    except (DocfeedError, OSError, ValueError) as exc:
        logger.error("Unable to render hits: %s", exc)
        raise typer.Exit(code=1)

    html = f"<p id=\"hits\">{results.hits_label}</p>\n{results.html}".rstrip("\n") + "\n"

    if output is None:
        typer.echo(html, nl=False)
    else:
        output.write_text(html, encoding="utf-8")
        logger.info("Rendered %s to %s", results.hits_label, output)


if __name__ == "__main__":
    app()
