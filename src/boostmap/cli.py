import json
from pathlib import Path
from typing import Any, Optional

import typer

from .config import Settings
from .container.adapters import InvalidArgumentType
from .container.map import Map, ValueRejected
from .keys.canonical import InvalidKeyType
from .logging import get_logger
from .typed import MapOfCollections, MapOfStrings

logger = get_logger(__name__)

app = typer.Typer(help="boostmap – ordered maps with keys of any type", no_args_is_help=True)


def _load_json(path: Path) -> Any:
    """Read and decode a JSON document, exiting with code 1 on bad input."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.error(f"Failed to read JSON from {path}: {exc}")
        raise typer.Exit(code=1) from exc


def _emit(result: Map, indent: Optional[int]) -> None:
    if indent is None:
        indent = Settings().json_indent
    try:
        text = result.to_json(indent=indent)
    except (InvalidKeyType, TypeError) as exc:
        logger.error(f"Result cannot be written as JSON: {exc}")
        raise typer.Exit(code=1) from exc
    typer.echo(text)


@app.command()
def partition(
    path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="JSON array or object of strings"),
    separator: str = typer.Option("-", "--separator", "-s", help="Group each value by the text before this separator"),
    indent: Optional[int] = typer.Option(None, help="Indentation of the JSON output"),
) -> None:
    """
    Partition string values into groups.

    Each value is grouped under the text before the first separator; values
    without the separator form a group of their own. Original keys are kept
    inside each group.
    """
    data = _load_json(path)

    try:
        values = MapOfStrings(data)
        groups = values.partition(lambda value, key: value.split(separator, 1)[0])
    except (InvalidArgumentType, ValueRejected, InvalidKeyType) as exc:
        logger.error(f"Cannot partition {path}: {exc}")
        raise typer.Exit(code=1) from exc

    logger.info(f"Partitioned {values.count()} values into {groups.count()} groups")
    _emit(groups, indent)


@app.command()
def pluck(
    path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False, help="JSON array or object of records"),
    field: str = typer.Argument(..., help="Field to extract from every record"),
    key_by: Optional[str] = typer.Option(None, "--key-by", "-k", help="Field whose value keys each result"),
    indent: Optional[int] = typer.Option(None, help="Indentation of the JSON output"),
) -> None:
    """
    Extract one field from every record.

    Without --key-by the results are numbered from 0 in record order.
    """
    data = _load_json(path)

    try:
        records = MapOfCollections(data)
        column = records.pluck(field, key_by)
    except (InvalidArgumentType, ValueRejected) as exc:
        logger.error(f"Cannot read records from {path}: {exc}")
        raise typer.Exit(code=1) from exc
    except KeyError as exc:
        logger.error(f"Record without field {exc} in {path}")
        raise typer.Exit(code=1) from exc

    logger.info(f"Plucked {column.count()} values of {field!r} from {records.count()} records")
    _emit(column, indent)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
