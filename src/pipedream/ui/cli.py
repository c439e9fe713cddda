# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from pipedream.adapters.payload import load_invocation
from pipedream.config import ConfigurationError, configure_logging, get_engine_config
from pipedream.context import PluginContext
from pipedream.domain.model import InvocationRecord
from pipedream.services import LoggingTraceSink, ServiceProvider, TraceSink

if TYPE_CHECKING:
    from collections.abc import Sequence

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect PipeDream invocation payloads")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: %(default)s)",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Show execution trace lines regardless of --log-level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    inspect = subparsers.add_parser(
        "inspect", help="Resolve attributes and classify a JSON invocation payload"
    )
    inspect.add_argument("payload", type=Path, help="Path to the JSON payload ('-' for stdin)")
    inspect.add_argument(
        "-a",
        "--attribute",
        dest="attributes",
        action="append",
        default=[],
        help="Attribute to resolve; repeat for several (defaults to all known names)",
    )
    inspect.add_argument(
        "--pre-image",
        type=str,
        help="Pre-image name used for resolution (defaults to config)",
    )
    inspect.add_argument(
        "--max-depth",
        type=int,
        help="Maximum depth before an invocation counts as recursive (defaults to config)",
    )
    return parser.parse_args(list(argv))


def _read_payload(path: Path) -> str:
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def _known_attribute_names(context: PluginContext) -> list[str]:
    names: list[str] = []
    sources = [context.target, *(context.record.pre_entity_images or {}).values()]
    for entity in sources:
        if entity is None:
            continue
        for name in entity:
            if name not in names:
                names.append(name)
    return names


def inspect_payload(
    raw: str,
    *,
    attributes: Sequence[str] = (),
    pre_image_name: str | None = None,
    max_depth: int | None = None,
) -> list[str]:
    """Return report lines describing the invocation in ``raw``."""

    record = load_invocation(raw)
    config = get_engine_config()
    if pre_image_name:
        config = replace(config, pre_image_name=pre_image_name)
    if max_depth is not None:
        config = replace(config, max_depth=max_depth)

    services = ServiceProvider({InvocationRecord: record, TraceSink: LoggingTraceSink()})
    context = PluginContext(services, config=config)
    context.trace(f"Inspecting {record.message_name} on {record.primary_entity_name}")

    lines = [
        f"message: {record.message_name}",
        f"entity: {record.primary_entity_name or '-'} {record.primary_entity_id or ''}".rstrip(),
        f"stage: {record.stage}  mode: {record.mode}  depth: {record.depth}",
        f"initial invocation: {context.is_initial_invocation()}",
        f"exceeds depth (max {config.max_depth}): {context.exceeds_depth()}",
        f"has parent: {context.has_parent_context()}",
    ]
    for name in attributes or _known_attribute_names(context):
        resolved = context.get_final_attribute(name)
        changed = context.has_attribute_changed(name)
        lines.append(
            f"{name}: value={resolved.value!r} being_set={resolved.is_being_set} changed={changed}"
        )
    return lines


def main(argv: Sequence[str] | None = None) -> None:
    parsed_args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(
        level=getattr(logging, parsed_args.log_level), trace=parsed_args.trace, force=True
    )

    try:
        if parsed_args.command == "inspect":
            lines = inspect_payload(
                _read_payload(parsed_args.payload),
                attributes=parsed_args.attributes,
                pre_image_name=parsed_args.pre_image,
                max_depth=parsed_args.max_depth,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ValueError, ConfigurationError, OSError):
        log.exception("Could not inspect payload")
        sys.exit(2)

    for line in lines:
        print(line)


def entrypoint() -> None:
    load_dotenv()
    main()


if __name__ == "__main__":
    entrypoint()
