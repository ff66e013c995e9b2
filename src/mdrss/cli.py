"""CLI entry point for mdrss."""

from pathlib import Path
from typing import Optional

import typer

from mdrss.adapters.rss import RssSerializer
from mdrss.adapters.sources import MarkdownDirectorySource
from mdrss.config import DEFAULT_CONFIG_PATH, Settings, get_settings
from mdrss.core import FrontMatterExtractor, InvalidFeedConfig, MissingOrInvalidDate, PostParser
from mdrss.use_cases import FeedService


def main(
    input_dir: Optional[Path] = typer.Argument(None, help="Directory with markdown posts"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Where to write rss.xml"),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="YAML config file"),
    title: Optional[str] = typer.Option(None, help="Channel title"),
    link: Optional[str] = typer.Option(None, help="Channel link, base URL for item links"),
    description: Optional[str] = typer.Option(None, help="Channel description"),
    language: Optional[str] = typer.Option(None, help="Channel language, e.g. en-us"),
    delimiter: Optional[str] = typer.Option(None, help="Front matter delimiter line"),
    strict: bool = typer.Option(False, "--strict", help="Abort on the first file without a valid date"),
    workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Parse files in N threads"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print errors"),
) -> None:
    """Generate an RSS 2.0 feed from a directory of markdown files."""
    try:
        settings = get_settings(config)
    except (ValueError, OSError) as e:
        typer.echo(f"❌ Could not load config {config}: {e}", err=True)
        raise typer.Exit(code=1)

    apply_overrides(
        settings,
        input_dir=input_dir,
        output=output,
        title=title,
        link=link,
        description=description,
        language=language,
        delimiter=delimiter,
        strict=strict,
        workers=workers,
    )
    run(settings, verbose=not quiet)


def apply_overrides(settings: Settings, **overrides) -> None:
    """Apply command line values on top of the YAML settings."""
    if overrides.get("input_dir") is not None:
        settings.paths.input_dir = overrides["input_dir"]
    if overrides.get("output") is not None:
        settings.paths.output_path = overrides["output"]

    for key in ("title", "link", "description", "language"):
        if overrides.get(key) is not None:
            setattr(settings.feed, key, overrides[key])

    if overrides.get("delimiter") is not None:
        settings.parsing.delimiter = overrides["delimiter"]
    if overrides.get("strict"):
        settings.build.skip_invalid = False
    if overrides.get("workers") is not None:
        settings.build.max_workers = overrides["workers"]


def run(settings: Settings, verbose: bool = True) -> None:
    """Read, build and save the feed described by settings."""
    try:
        feed_config = settings.feed_config()
    except InvalidFeedConfig as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    if verbose:
        print("\n" + "=" * 70)
        print("📰 MDRSS - Markdown to RSS")
        print("=" * 70)
        print(f"\n⚙️  Settings:")
        print(f"  • Input: {settings.input_dir}")
        print(f"  • Output: {settings.output_path}")
        print(f"  • Channel: {feed_config.title} ({feed_config.link})")
        print(f"  • On invalid date: {'skip' if settings.build.skip_invalid else 'abort'}")

    source = MarkdownDirectorySource(
        settings.input_dir,
        extensions=tuple(settings.build.extensions),
        recursive=settings.build.recursive,
    )

    try:
        documents = source.read_documents()
    except (OSError, UnicodeDecodeError) as e:
        typer.echo(f"❌ Could not read {settings.input_dir}: {e}", err=True)
        raise typer.Exit(code=1)

    if verbose:
        print(f"\n{source.emoji} {source.name}: {len(documents)} files")

    parser = PostParser(
        date_formats=settings.parsing.date_formats,
        description_max_length=settings.parsing.description_max_length,
        extractor=FrontMatterExtractor(settings.parsing.delimiter),
    )

    service = FeedService(
        config=feed_config,
        parser=parser,
        serializer=RssSerializer(),
        skip_invalid=settings.build.skip_invalid,
        max_workers=settings.build.max_workers,
        verbose=verbose,
    )

    try:
        result = service.build(documents)
    except MissingOrInvalidDate as e:
        typer.echo(f"❌ Aborted: {e}", err=True)
        raise typer.Exit(code=1)

    service.save_feed(result.xml, settings.output_path)

    if verbose:
        print("\n" + "=" * 70)
        print(f"✅ DONE: {len(result.feed.posts)} items")
        print("=" * 70)


def app() -> None:
    """CLI entry point."""
    typer.run(main)


if __name__ == "__main__":
    app()
