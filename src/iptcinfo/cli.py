from pathlib import Path

import orjson
import typer
from rich.console import Console
from rich.table import Table

from iptcinfo.config import IPTCConfig, load_config
from iptcinfo.datasets import DEFAULT_REGISTRY
from iptcinfo.decoder import iter_tags
from iptcinfo.export import (
    export_sql,
    export_xml,
    info_to_payload,
    payloads_to_arrow,
    payloads_to_jsonl,
)
from iptcinfo.info import IPTCInfo
from iptcinfo.log import setup_logging
from iptcinfo.scanner import NotFound, scan
from iptcinfo.synthetic import generate_synthetic_image

app = typer.Typer(help="Extract IPTC (IIM record 2) metadata embedded in images.")
console = Console()


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Logging level; defaults to $IPTCINFO_LOG_LEVEL or WARNING."
    ),
) -> None:
    setup_logging(log_level)


def _require_file(path: Path) -> Path:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return path


def _config(path: Path | None) -> IPTCConfig:
    return load_config(_require_file(path)) if path else IPTCConfig()


def _pairs(entries: list[str] | None, option: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for entry in entries or []:
        if "=" not in entry:
            raise typer.BadParameter(f"{option} must be KEY=VALUE, got '{entry}'")
        key, value = entry.split("=", 1)
        pairs[key.strip()] = value
    return pairs


def _load_info(input: Path, config: IPTCConfig) -> IPTCInfo:
    info = IPTCInfo.from_path(_require_file(input), config=config)
    if info is None:
        console.print(
            f"[bold red]No IPTC data found[/] in first {config.max_prefix} bytes of {input}"
        )
        raise typer.Exit(code=1)
    return info


CONFIG_OPTION = typer.Option(None, "--config", "-c", help="YAML/JSON reader configuration.")


@app.command()
def show(
    input: Path = typer.Argument(..., help="Image file to read."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Optional path to write JSON."),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Print decoded IPTC attributes as JSON."""
    info = _load_info(input, _config(config))
    payload = info_to_payload(info, source=str(input))
    if output:
        output.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        console.print(f"[bold green]Wrote attributes[/] to {output}")
    else:
        text = orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode()
        console.print(text, markup=False, highlight=False, soft_wrap=True)


@app.command()
def tags(
    input: Path = typer.Argument(..., help="Image file to inspect."),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """List every raw record 2 tag after the version header."""
    cfg = _config(config)
    with _require_file(input).open("rb") as f:
        found = scan(f, max_prefix=cfg.max_prefix)
        if isinstance(found, NotFound):
            console.print(f"[bold red]No IPTC data found[/] in {input}")
            raise typer.Exit(code=1)
        table = Table(title=f"IIM record 2 tags at offset {found.offset}")
        table.add_column("dataset", justify="right")
        table.add_column("name")
        table.add_column("length", justify="right")
        for header, _value in iter_tags(f):
            name = DEFAULT_REGISTRY.dataset_name(header.dataset) or "[dim]unsupported[/]"
            table.add_row(str(header.dataset), name, str(header.length))
    console.print(table)


@app.command()
def xml(
    input: Path = typer.Argument(..., help="Image file to read."),
    basetag: str | None = typer.Option(None, "--basetag", "-b", help="Enclosing entity name."),
    extra: list[str] | None = typer.Option(
        None, "--extra", "-e", help="Extra KEY=VALUE entry to include (repeatable)."
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Optional path to write XML."),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Export attributes as XML."""
    cfg = _config(config)
    info = _load_info(input, cfg)
    text = export_xml(
        info, basetag=basetag or cfg.xml_basetag, extra=_pairs(extra, "--extra"), output=output
    )
    if output:
        console.print(f"[bold green]Wrote XML[/] to {output}")
    else:
        console.print(text, markup=False, highlight=False, soft_wrap=True, end="")


@app.command()
def sql(
    input: Path = typer.Argument(..., help="Image file to read."),
    table: str | None = typer.Option(None, "--table", "-t", help="Target table name."),
    mapping: list[str] | None = typer.Option(
        None, "--map", "-m", help="ATTRIBUTE=COLUMN mapping (repeatable)."
    ),
    extra: list[str] | None = typer.Option(
        None, "--extra", "-e", help="Extra COLUMN=VALUE to insert (repeatable)."
    ),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Print an INSERT statement for the mapped attributes."""
    cfg = _config(config)
    mappings = {**cfg.sql_mappings, **_pairs(mapping, "--map")}
    table_name = table or cfg.sql_table
    if not table_name or not mappings:
        raise typer.BadParameter("A table name and at least one --map are required.")
    info = _load_info(input, cfg)
    statement = export_sql(info, table_name, mappings, extra=_pairs(extra, "--extra"))
    console.print(statement, markup=False, highlight=False, soft_wrap=True)


@app.command()
def batch(
    directory: Path = typer.Argument(..., help="Directory of images to scan."),
    pattern: str = typer.Option("*.jpg", "--pattern", "-p", help="Glob pattern for files."),
    jsonl: Path | None = typer.Option(None, "--jsonl", help="Write one JSON line per file."),
    arrow: Path | None = typer.Option(None, "--arrow", help="Write an Arrow IPC table."),
    config: Path | None = CONFIG_OPTION,
) -> None:
    """Read every matching file and summarize which ones carry IPTC data."""
    if not directory.is_dir():
        raise typer.BadParameter(f"Input directory not found: {directory}")
    cfg = _config(config)
    payloads = [
        info_to_payload(IPTCInfo.from_path(path, config=cfg), source=str(path))
        for path in sorted(directory.glob(pattern))
        if path.is_file()
    ]
    found = sum(1 for p in payloads if p["found"])
    console.print(f"[bold green]Read[/] {len(payloads)} files, {found} with IPTC data")
    if jsonl:
        payloads_to_jsonl(payloads, jsonl)
        console.print(f"[bold green]Wrote JSONL[/] to {jsonl}")
    if arrow:
        payloads_to_arrow(payloads, arrow)
        console.print(f"[bold green]Wrote Arrow table[/] to {arrow}")


@app.command()
def synthetic(
    output: Path = typer.Argument(..., help="Path to write the synthetic image bytes."),
    metadata: Path | None = typer.Option(
        None, "--metadata", "-m", help="Optional path to write the expected attributes as JSON."
    ),
    seed: int = typer.Option(1234, "--seed", help="Seed for reproducible generation."),
    prefix_bytes: int = typer.Option(
        50, "--prefix-bytes", help="Binary bytes before the IIM block."
    ),
) -> None:
    """Write a file with an IIM record 2 block behind a binary prefix."""
    data, meta = generate_synthetic_image(seed=seed, prefix_bytes=prefix_bytes)
    output.write_bytes(data)
    console.print(f"[bold green]Wrote[/] {len(data)} bytes to {output}")
    if metadata:
        metadata.write_bytes(orjson.dumps(meta, option=orjson.OPT_INDENT_2))
        console.print(f"[bold green]Wrote metadata[/] to {metadata}")


if __name__ == "__main__":
    app()
