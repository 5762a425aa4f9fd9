"""Entry point: python -m recast"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from recast import __version__
from recast.constants import DEFAULT_HTTP_TIMEOUT, LOG_FORMAT, MODELS

logger = logging.getLogger("recast")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging on stderr with rich handler if available."""
    level = logging.DEBUG if verbose else logging.WARNING

    try:
        from rich.console import Console
        from rich.logging import RichHandler

        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        )
    except ImportError:
        logging.basicConfig(level=level, format=LOG_FORMAT)


def _add_preset_fields(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--name", default="preset", help="Preset name")
    parser.add_argument(
        "--provider", default="anthropic", choices=sorted(MODELS), help="Text-generation provider"
    )
    parser.add_argument("--model", default="", help="Model id (default: provider's first model)")
    parser.add_argument("--mode", default="bulletize", help="Transform mode")
    parser.add_argument("--language", default="ja", choices=["ja", "en"], help="Output language")
    parser.add_argument("--temperature", type=float, default=0.7, help="Sampling temperature (0-1)")
    parser.add_argument("--max-tokens", type=int, default=1000, help="Maximum output tokens")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="recast",
        description="Rewrite text with a named LLM preset",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"recast {__version__}"
    )
    parser.add_argument(
        "--config", type=str, default=None, help="Path to config file"
    )
    parser.add_argument(
        "--presets", type=str, default=None, help="Path to presets file"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Apply a preset to text")
    convert.add_argument("-p", "--preset", required=True, help="Preset name or id")
    convert.add_argument(
        "-f", "--file", type=str, default=None, help="Read input from file (default: stdin)"
    )

    presets = sub.add_parser("presets", help="Manage presets")
    presets_sub = presets.add_subparsers(dest="action", required=True)
    presets_sub.add_parser("list", help="List presets")
    add = presets_sub.add_parser("add", help="Save a new preset")
    _add_preset_fields(add)
    overwrite = presets_sub.add_parser("overwrite", help="Replace an existing preset")
    overwrite.add_argument("preset", help="Preset name or id")
    _add_preset_fields(overwrite)
    delete = presets_sub.add_parser("delete", help="Delete a preset")
    delete.add_argument("preset", help="Preset name or id")

    sub.add_parser("modes", help="List transform modes")

    models = sub.add_parser("models", help="List models per provider")
    models.add_argument("provider", nargs="?", choices=sorted(MODELS), default=None)

    keys = sub.add_parser("keys", help="Manage API keys")
    keys_sub = keys.add_subparsers(dest="action", required=True)
    set_key = keys_sub.add_parser("set", help="Store an API key")
    set_key.add_argument("provider", choices=sorted(MODELS))
    set_key.add_argument("key")
    keys_sub.add_parser("show", help="Show which keys are configured (masked)")

    return parser.parse_args(argv)


def _mask(key: str) -> str:
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}…{key[-4:]}"


def _fields_from_args(args: argparse.Namespace):
    from recast.presets import PresetFields

    return PresetFields(
        name=args.name,
        provider=args.provider,
        model=args.model,
        transform_mode=args.mode,
        language=args.language,
        temperature=args.temperature,
        max_tokens=args.max_tokens,
    )


def cmd_convert(args: argparse.Namespace, config_path: Path | None, presets_path: Path | None) -> int:
    """Run one conversion and print the result. Returns the exit code."""
    from recast.config import AppConfig
    from recast.converter import Converter
    from recast.presets import PresetStore

    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()
    text = text.strip()
    if not text:
        print("ERROR: missing input text", file=sys.stderr)
        return 1

    store = PresetStore(presets_path)
    store.load()
    preset = store.find(args.preset)
    if preset is None:
        print("ERROR: no preset selected", file=sys.stderr)
        return 1

    config = AppConfig.load(config_path)
    timeout = config.http.timeout if config.http.timeout > 0 else DEFAULT_HTTP_TIMEOUT
    result = Converter(keys=config.keys, timeout=timeout).convert(preset, text)
    if not result.ok:
        print(result.message, file=sys.stderr)
        return 1

    print(result.text)
    return 0


def cmd_presets(args: argparse.Namespace, presets_path: Path | None) -> int:
    from recast.presets import PresetStore

    store = PresetStore(presets_path)
    store.load()

    if args.action == "list":
        if not store.presets:
            print("No presets saved.")
        for p in store.presets:
            print(
                f"  {p.name:<20} {p.provider}/{p.model}  mode={p.transform_mode} "
                f"lang={p.language} temp={p.temperature:.1f} tokens={p.max_tokens}  [{p.id}]"
            )
        return 0

    if args.action == "add":
        preset = store.add(_fields_from_args(args))
        print(f"Saved preset {preset.name} [{preset.id}]")
        return 0

    existing = store.find(args.preset)
    if existing is None:
        print(f"ERROR: preset not found: {args.preset}", file=sys.stderr)
        return 1

    if args.action == "overwrite":
        store.overwrite(existing.id, _fields_from_args(args))
        print(f"Overwrote preset {existing.id}")
    else:
        store.delete(existing.id)
        print(f"Deleted preset {existing.name}")
    return 0


def cmd_list_modes() -> None:
    """Print available transform modes and their output format."""
    from recast.transform.modes import all_modes

    for mode_id, definition in all_modes():
        print(f"  {mode_id:<20} {definition.output_format.value:<5} {definition.instruction}")


def cmd_list_models(provider: str | None) -> None:
    for name, models in MODELS.items():
        if provider and name != provider:
            continue
        print(f"{name}:")
        for m in models:
            print(f"  {m}")


def cmd_keys(args: argparse.Namespace, config_path: Path | None) -> int:
    from recast.config import AppConfig, MissingCredentialError

    config = AppConfig.load(config_path)

    if args.action == "set":
        config.keys.set_api_key(args.provider, args.key)
        config.save(config_path)
        print(f"Saved {args.provider} key")
        return 0

    for provider in MODELS:
        key = config.keys.get_api_key(provider)
        shown = "not set" if isinstance(key, MissingCredentialError) else _mask(key)
        print(f"  {provider:<10} {shown}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(verbose=args.verbose)

    config_path = Path(args.config) if args.config else None
    presets_path = Path(args.presets) if args.presets else None

    try:
        if args.command == "convert":
            return cmd_convert(args, config_path, presets_path)
        if args.command == "presets":
            return cmd_presets(args, presets_path)
        if args.command == "modes":
            cmd_list_modes()
            return 0
        if args.command == "models":
            cmd_list_models(args.provider)
            return 0
        if args.command == "keys":
            return cmd_keys(args, config_path)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
        return 130
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 1


if __name__ == "__main__":
    sys.exit(main())
