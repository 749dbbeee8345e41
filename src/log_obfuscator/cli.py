from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

from log_obfuscator.core.config import (
    MaskingSettings,
    build_masker,
    load_settings_file,
    resolve_masking_settings,
)
from log_obfuscator.core.errors import IncorrectConfigurationError
from log_obfuscator.core.file_masking import iter_masked_lines, mask_file
from log_obfuscator.core.masker import SensitiveDataMasker
from log_obfuscator.core.models import SensitiveValuePattern


def _resolve_settings(args: argparse.Namespace) -> MaskingSettings:
    base = load_settings_file(args.config) if args.config else None
    settings = resolve_masking_settings(base)

    updates: dict[str, object] = {}
    if args.fields:
        updates["fields"] = [*settings.fields, *args.fields]
    if args.shapes:
        updates["shapes"] = [*settings.shapes, *args.shapes]
    if args.templates:
        updates["custom_templates"] = [*settings.custom_templates, *args.templates]
    if args.strategy:
        updates["strategy"] = args.strategy
    if args.mask is not None:
        updates["mask"] = args.mask
    if not updates:
        return settings
    try:
        return MaskingSettings.model_validate({**settings.model_dump(), **updates})
    except ValueError as e:
        raise IncorrectConfigurationError(str(e)) from e


async def _print_masked(path: Path, masker: SensitiveDataMasker) -> None:
    async for _, line in iter_masked_lines(path, masker):
        print(line)


def _mask_stdin(masker: SensitiveDataMasker) -> None:
    for line in sys.stdin:
        print(masker.process(line.rstrip("\r\n")))


def main(argv: Sequence[str] | None = None) -> None:
    p = argparse.ArgumentParser(description="Mask sensitive values in log files.")
    p.add_argument("log_path", help="Log file to mask (plain or .gz), or '-' for stdin")
    p.add_argument("--field", dest="fields", action="append", default=[], help="Sensitive field name (repeatable)")
    p.add_argument(
        "--shape",
        dest="shapes",
        action="append",
        default=[],
        help="Shape name (repeatable). One of: " + ", ".join(s.name for s in SensitiveValuePattern),
    )
    p.add_argument(
        "--template",
        dest="templates",
        action="append",
        default=[],
        help="Custom regex with [PROPERTY_NAME] and one capturing group (repeatable)",
    )
    p.add_argument("--strategy", choices=["full", "shortcut"], default=None)
    p.add_argument("--mask", default=None, help="Placeholder for the full strategy (default: ********)")
    p.add_argument("--config", default=None, help="JSON settings file")
    p.add_argument("-o", "--output", default=None, help="Write the masked log here instead of stdout")

    args = p.parse_args(argv)

    try:
        masker = build_masker(_resolve_settings(args))
        if args.log_path == "-":
            _mask_stdin(masker)
            return
        path = Path(args.log_path)
        if args.output:
            count = asyncio.run(mask_file(path, args.output, masker))
            print(f"Masked {count} lines into {args.output}.", file=sys.stderr)
        else:
            asyncio.run(_print_masked(path, masker))
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (IncorrectConfigurationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    main()
