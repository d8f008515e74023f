import dataclasses

import pytest

from language import DEFAULT_TEXTS
from models import ConfigLayer, format_settings, new_default_config, resolve

TEXT_FIELDS = ("chapter_prefix", "running_header", "page_number_prefix", "page_count_prefix", "blank_page_text")


def assert_texts(config, language):
    bundle = DEFAULT_TEXTS[language]
    for name in TEXT_FIELDS:
        assert getattr(config, name) == getattr(bundle, name), name


def test_default_config_is_english():
    base = new_default_config("en")
    assert base.language == "en"
    assert_texts(base, "en")
    assert base.source_dir == "_pdfs"
    assert base.target_dir == "_target"
    assert base.evenify is True
    assert base.force is False
    assert base.separator == " - "


@pytest.mark.parametrize("language", ["de", "fr"])
def test_default_config_uses_language_texts(language):
    assert_texts(new_default_config(language), language)


def test_default_config_for_unknown_language_is_english():
    base = new_default_config("zu")
    assert base.language == "en"
    assert_texts(base, "en")


def test_effective_config_is_immutable():
    base = new_default_config("en")
    with pytest.raises(dataclasses.FrozenInstanceError):
        base.force = True


@pytest.mark.parametrize("field", ["force", "evenify", "merge", "personal_touch", "verbose"])
@pytest.mark.parametrize("before", [True, False])
@pytest.mark.parametrize("supplied", [True, False, None])
def test_boolean_merge(field, before, supplied):
    base = dataclasses.replace(new_default_config("en"), **{field: before})
    merged = base.merge_with(ConfigLayer(**{field: supplied}))
    expected = before if supplied is None else supplied
    assert getattr(merged, field) is expected


def test_unset_flag_does_not_clobber_true():
    base = new_default_config("en")
    assert base.evenify is True
    assert base.merge_with(ConfigLayer(force=True)).evenify is True


@pytest.mark.parametrize("field", ["source_dir", "target_dir", "separator", "merge_file_name", "chapter_prefix"])
def test_string_merge(field):
    base = new_default_config("en")
    assert getattr(base.merge_with(ConfigLayer(**{field: "xyz"})), field) == "xyz"
    assert getattr(base.merge_with(ConfigLayer(**{field: ""})), field) == getattr(base, field)
    assert getattr(base.merge_with(ConfigLayer()), field) == getattr(base, field)


@pytest.mark.parametrize("language", ["de", "fr"])
def test_language_layer_cascades_texts(language):
    merged = new_default_config("en").merge_with(ConfigLayer(language=language))
    assert merged.language == language
    assert_texts(merged, language)


def test_language_cascade_overrides_earlier_custom_texts():
    custom = new_default_config("en").merge_with(ConfigLayer(chapter_prefix="Part "))
    merged = custom.merge_with(ConfigLayer(language="de"))
    assert merged.chapter_prefix == "Kapitel "


def test_explicit_text_in_same_layer_wins_over_cascade():
    layer = ConfigLayer(language="de", page_number_prefix="S.", chapter_prefix="Kap.")
    merged = new_default_config("en").merge_with(layer)

    assert merged.page_number_prefix == "S."
    assert merged.chapter_prefix == "Kap."
    assert merged.page_count_prefix == DEFAULT_TEXTS["de"].page_count_prefix
    assert merged.blank_page_text == DEFAULT_TEXTS["de"].blank_page_text


def test_explicit_blank_page_text_with_language():
    layer = ConfigLayer(language="de", blank_page_text="absichtlich frei")
    merged = new_default_config("en").merge_with(layer)
    assert merged.blank_page_text == "absichtlich frei"
    assert merged.chapter_prefix == DEFAULT_TEXTS["de"].chapter_prefix


def test_regional_language_in_layer():
    merged = new_default_config("en").merge_with(ConfigLayer(language="fr-CA"))
    assert merged.language == "fr"


@pytest.mark.parametrize("language", ["is-IS", "@@@", ""])
def test_unsupported_language_is_no_override(language):
    base = new_default_config("de")
    merged = base.merge_with(ConfigLayer(language=language))
    assert merged == base


def test_merge_does_not_modify_base():
    base = new_default_config("en")
    base.merge_with(ConfigLayer(language="de", force=True))
    assert base.language == "en"
    assert base.force is False


def test_resolve_applies_layers_in_order():
    defaults = new_default_config("en")
    file_layer = ConfigLayer(language="de", source_dir="from-file", force=True)
    flag_layer = ConfigLayer(source_dir="from-flags", evenify=False)

    config = resolve(defaults, file_layer, flag_layer)

    assert config.language == "de"
    assert config.source_dir == "from-flags"
    assert config.force is True
    assert config.evenify is False
    assert_texts(config, "de")


def test_resolve_without_layers_returns_defaults():
    defaults = new_default_config("fr")
    assert resolve(defaults) == defaults


def test_format_settings_marks_empty_values():
    config = dataclasses.replace(new_default_config("en"), running_header="")
    lines = format_settings(config)
    assert "Running header: <not set>" in lines
    assert "Language: en" in lines
    assert "Evenify: True" in lines
