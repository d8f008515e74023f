"""
Configuration layers and the resolved configuration.

A run's configuration is assembled from an ordered list of layers
(defaults, config files, command-line flags). Each layer only carries the
values it actually supplies; everything else is None. Folding the layers
with ``EffectiveConfig.merge_with`` yields one immutable configuration.
"""

from dataclasses import asdict, dataclass, fields, replace
from functools import reduce
from typing import Optional

from language import match_language, resolve_language, text_bundle

DEFAULT_SOURCE_DIR = "_pdfs"
DEFAULT_TARGET_DIR = "_target"
DEFAULT_SEPARATOR = " - "
DEFAULT_MERGE_FILE_NAME = "merged.pdf"


def present(value) -> bool:
    """True if a layer value should override: not None and not an empty string."""
    return value is not None and value != ""


@dataclass(frozen=True)
class ConfigLayer:
    """
    One merge input, e.g. a config file or the command line.

    Attributes:
        language: Raw language string, resolved during the merge
        source_dir: Directory to read candidate PDFs from
        target_dir: Directory the processed copies are written to
        force: Overwrite a non-empty target directory
        evenify: Pad odd-length documents with a blank page
        merge: Concatenate all processed files into one
        merge_file_name: Name of the merged file inside the target directory
        running_header: Text for a running page header
        chapter_prefix: Text placed before the chapter number
        separator: Text between chapter and page part of a label
        page_number_prefix: Text placed before the page number
        page_count_prefix: Text placed before a total page count
        blank_page_text: Caption stamped on inserted blank pages
        personal_touch: Add a personal touch to the output
        verbose: Print detailed progress output
    """

    language: Optional[str] = None
    source_dir: Optional[str] = None
    target_dir: Optional[str] = None
    force: Optional[bool] = None
    evenify: Optional[bool] = None
    merge: Optional[bool] = None
    merge_file_name: Optional[str] = None
    running_header: Optional[str] = None
    chapter_prefix: Optional[str] = None
    separator: Optional[str] = None
    page_number_prefix: Optional[str] = None
    page_count_prefix: Optional[str] = None
    blank_page_text: Optional[str] = None
    personal_touch: Optional[bool] = None
    verbose: Optional[bool] = None

    def supplied(self) -> dict:
        """Return the fields this layer supplies, keyed by field name."""
        return {f.name: getattr(self, f.name) for f in fields(self) if present(getattr(self, f.name))}


@dataclass(frozen=True)
class EffectiveConfig:
    """The resolved configuration of a single run. Never mutated after resolution."""

    language: str
    source_dir: str
    target_dir: str
    force: bool
    evenify: bool
    merge: bool
    merge_file_name: str
    running_header: str
    chapter_prefix: str
    separator: str
    page_number_prefix: str
    page_count_prefix: str
    blank_page_text: str
    personal_touch: bool
    verbose: bool

    def merge_with(self, layer: ConfigLayer) -> "EffectiveConfig":
        """Return a new configuration with ``layer`` applied on top of this one.

        A supported language in the layer first resets the five language
        dependent texts to that language's defaults. Every other value the
        layer supplies is applied afterwards, so an explicit text in the same
        layer wins over the language defaults. An unsupported or malformed
        language leaves the language unchanged. Merging never fails.
        """
        changes = {}
        supplied = layer.supplied()

        raw_language = supplied.pop("language", None)
        if raw_language is not None:
            language = match_language(raw_language)
            if language is not None:
                changes["language"] = language
                changes.update(asdict(text_bundle(language)))

        changes.update(supplied)
        return replace(self, **changes)


def new_default_config(language: Optional[str] = None) -> EffectiveConfig:
    """Build the lowest-priority configuration for ``language``.

    Unsupported or missing languages fall back to English.
    """
    resolved = resolve_language(language)
    return EffectiveConfig(
        language=resolved,
        source_dir=DEFAULT_SOURCE_DIR,
        target_dir=DEFAULT_TARGET_DIR,
        force=False,
        evenify=True,
        merge=False,
        merge_file_name=DEFAULT_MERGE_FILE_NAME,
        separator=DEFAULT_SEPARATOR,
        personal_touch=False,
        verbose=False,
        **asdict(text_bundle(resolved)),
    )


def resolve(defaults: EffectiveConfig, *layers: ConfigLayer) -> EffectiveConfig:
    """Apply ``layers`` to ``defaults`` in order, lowest priority first."""
    return reduce(lambda config, layer: config.merge_with(layer), layers, defaults)


def format_settings(config: EffectiveConfig) -> list[str]:
    """Render the final configuration as printable lines."""

    def line(name, value):
        if isinstance(value, bool):
            return f"{name}: {value}"
        return f"{name}: {value if value else '<not set>'}"

    rule = "=" * 20
    return [
        "Your Current PDFminion Configuration:",
        line("Source directory", config.source_dir),
        line("Target directory", config.target_dir),
        line("Force", config.force),
        rule,
        line("Verbose", config.verbose),
        line("Evenify", config.evenify),
        line("Language", config.language),
        line("Personal-touch", config.personal_touch),
        rule,
        line("Running header", config.running_header),
        line("Chapter prefix", config.chapter_prefix),
        line("Separator", config.separator),
        line("Page prefix", config.page_number_prefix),
        line("Total page count prefix", config.page_count_prefix),
        line("Blank page text", config.blank_page_text),
        rule,
        line("Merge", config.merge),
        line("Merge file name", config.merge_file_name),
    ]
