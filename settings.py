"""
Load configuration layers and resolve the configuration of a run.

Priority, lowest first:
1. defaults, depending on the system language
2. ``~/pdfminion.yaml`` (if it exists)
3. ``./pdfminion.yaml`` (if it exists), or the file given with ``--config``
4. command-line flags

A layer only overrides what it explicitly supplies, so a boolean flag
that was not given never clobbers a value set by a lower layer.
"""

import argparse
import logging
from dataclasses import fields
from pathlib import Path
from typing import Mapping, Optional

import yaml

from language import detect_system_language, match_language
from models import ConfigLayer, EffectiveConfig, new_default_config, resolve

CONFIG_FILE_NAME = "pdfminion.yaml"

BOOL_FIELDS = ("force", "evenify", "merge", "personal_touch", "verbose")

# Config file keys: every field name in snake_case and kebab-case, plus the
# spellings used by the command-line flags.
FILE_KEYS = {
    **{f.name: f.name for f in fields(ConfigLayer)},
    **{f.name.replace("_", "-"): f.name for f in fields(ConfigLayer)},
    "source": "source_dir",
    "target": "target_dir",
    "page-prefix": "page_number_prefix",
    "page_prefix": "page_number_prefix",
    "personal": "personal_touch",
}


class ConfigError(Exception):
    """The configuration cannot be loaded; aborts the run."""


def layer_from_mapping(data: Mapping, source: str = "config") -> ConfigLayer:
    """Build a ConfigLayer from a parsed config file.

    Unknown keys are logged and ignored. ``merge`` may be a boolean or the
    name of the merged file.

    Raises:
        ConfigError: The document is not a mapping or a value has the wrong type.
    """
    if not isinstance(data, Mapping):
        raise ConfigError(f"{source}: expected a mapping of settings, got {type(data).__name__}")

    values = {}
    for key, value in data.items():
        name = FILE_KEYS.get(str(key).strip().lower())
        if name is None:
            logging.warning(f"{source}: ignoring unknown setting {key!r}")
            continue
        if value is None:
            continue

        if name == "merge" and isinstance(value, str):
            values["merge"] = True
            values["merge_file_name"] = value
        elif name in BOOL_FIELDS:
            if not isinstance(value, bool):
                raise ConfigError(f"{source}: {key!r} must be true or false, got {value!r}")
            values[name] = value
        else:
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise ConfigError(f"{source}: {key!r} must be a text value, got {value!r}")
            values[name] = str(value)

    language = values.get("language")
    if language and match_language(language) is None:
        logging.warning(f"{source}: language {language!r} is not supported, ignoring it")

    return ConfigLayer(**values)


def load_config_file(path) -> ConfigLayer:
    """Read one YAML config file.

    Raises:
        ConfigError: The file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Cannot parse config file {path}: {e}") from e

    logging.debug(f"Loaded config file {path}")
    return layer_from_mapping(data or {}, source=str(path))


def config_file_layers(config_path: Optional[str] = None, home_dir=None, cwd=None) -> list[ConfigLayer]:
    """Load the config file layers, lowest priority first.

    An explicit ``config_path`` must exist. Otherwise the default file is
    looked up in the home directory, then in the working directory.
    """
    if config_path:
        return [load_config_file(config_path)]

    layers = []
    seen = set()
    for directory in (home_dir or Path.home(), cwd or Path.cwd()):
        candidate = Path(directory) / CONFIG_FILE_NAME
        if not candidate.is_file() or candidate.resolve() in seen:
            continue
        seen.add(candidate.resolve())
        layers.append(load_config_file(candidate))
    return layers


def flag_layer(args: argparse.Namespace) -> ConfigLayer:
    """Build the layer of flags the user actually gave on the command line.

    Every flag defaults to None, which means "not supplied".
    """
    merge = None
    merge_file_name = None
    if args.merge is not None:
        merge = True
        merge_file_name = args.merge or None

    return ConfigLayer(
        language=args.language,
        source_dir=args.source,
        target_dir=args.target,
        force=args.force,
        evenify=args.evenify,
        merge=merge,
        merge_file_name=merge_file_name,
        running_header=args.running_header,
        chapter_prefix=args.chapter_prefix,
        separator=args.separator,
        page_number_prefix=args.page_prefix,
        page_count_prefix=args.page_count_prefix,
        blank_page_text=args.blank_page_text,
        personal_touch=args.personal,
        verbose=args.verbose,
    )


def check_language(language: Optional[str], strict: bool = False) -> None:
    """Report an explicitly requested language that is not supported.

    Raises:
        ConfigError: Only in strict mode.
    """
    if not language or match_language(language) is not None:
        return
    if strict:
        raise ConfigError(f"Language {language!r} is not supported (try 'list-languages')")
    logging.warning(f"Language {language!r} is not supported, ignoring it")


def configure_application(
    args: argparse.Namespace,
    environ: Optional[Mapping[str, str]] = None,
    home_dir=None,
    cwd=None,
) -> EffectiveConfig:
    """Collect all configuration layers and merge them into one configuration.

    Raises:
        ConfigError: A config file failed to load, or strict language
                     checking rejected ``--language``.
    """
    system_language = detect_system_language(environ)
    logging.debug(f"System language detected: {system_language}")

    check_language(args.language, strict=getattr(args, "strict_language", False))

    layers = [*config_file_layers(args.config, home_dir=home_dir, cwd=cwd), flag_layer(args)]
    config = resolve(new_default_config(system_language), *layers)
    logging.debug(f"Configuration completed: {config}")
    return config
