import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from ideor.errors import EmptyResultError, InsufficientResultsError, UpstreamUnparseableError
from ideor.normalizer import (
    combine_title_subtitle,
    limit_words,
    normalize_ideas,
    parse_ideas_strict,
    split_free_text,
    strip_fences,
)


def test_strip_fences_variants():
    assert strip_fences('```json\n{"ideas": []}\n```') == '{"ideas": []}'
    assert strip_fences('```\n[1, 2]\n```') == '[1, 2]'
    assert strip_fences('  {"a": 1}  ') == '{"a": 1}'
    assert strip_fences("") == ""
    assert strip_fences(None) == ""


def test_limit_words_adds_ellipsis_only_when_cut():
    assert limit_words("one two three four five six") == "one two three four five six"
    assert limit_words("one two three four five six seven") == "one two three four five six…"
    assert limit_words("  padded title ") == "padded title"


def test_combine_title_subtitle():
    assert combine_title_subtitle("App de Frete", "Conecta motoristas") == "App de Frete — Conecta motoristas"
    assert combine_title_subtitle("Só título", "") == "Só título"
    assert combine_title_subtitle("", "Só subtítulo") == "Só subtítulo"
    assert combine_title_subtitle("", "   ") == ""


def test_combine_title_subtitle_truncates_and_trims():
    combined = combine_title_subtitle("Título", "x " * 300, max_chars=50)
    assert len(combined) <= 50
    assert combined == combined.rstrip()
    assert combined.startswith("Título — ")


def test_split_free_text_separator_priority():
    # em dash beats colon even when the colon comes first
    assert split_free_text("A: b — c") == ("A: b", "c")
    assert split_free_text("Marketplace: conecta pessoas") == ("Marketplace", "conecta pessoas")
    assert split_free_text("Frete - rápido") == ("Frete", "rápido")
    assert split_free_text("Primeira frase. Segunda frase") == ("Primeira frase", "Segunda frase")
    assert split_free_text("sem separador") == ("sem separador", "")


def test_normalize_ideas_object_form():
    raw = '{"ideas": [{"title": "Frete Fácil", "subtitle": "Fretes sob demanda"}, {"title": "Horta Urbana", "subtitle": "Kits para apartamentos"}]}'
    assert normalize_ideas(raw, 2) == [
        "Frete Fácil — Fretes sob demanda",
        "Horta Urbana — Kits para apartamentos",
    ]


def test_normalize_ideas_fenced_and_bare_array():
    fenced = '```json\n{"ideas": [{"title": "A", "subtitle": "b"}]}\n```'
    assert normalize_ideas(fenced, 3) == ["A — b"]

    bare = '[{"title": "A", "subtitle": "b"}, "C: d"]'
    assert normalize_ideas(bare, 3) == ["A — b", "C — d"]


def test_normalize_ideas_embedded_in_prose():
    raw = 'Claro! Aqui estão: {"ideas": [{"title": "Pet Care", "subtitle": "Cuidados em casa"}]} Espero ter ajudado.'
    assert normalize_ideas(raw, 3) == ["Pet Care — Cuidados em casa"]


def test_normalize_ideas_nested_json_strings():
    raw = '{"ideas": ["{\\"title\\": \\"Aula Já\\", \\"subtitle\\": \\"Reforço escolar\\"}"]}'
    assert normalize_ideas(raw, 1) == ["Aula Já — Reforço escolar"]


def test_normalize_ideas_word_limit_applies_to_titles():
    raw = '{"ideas": [{"title": "um dois tres quatro cinco seis sete oito", "subtitle": "sub"}]}'
    assert normalize_ideas(raw, 1) == ["um dois tres quatro cinco seis… — sub"]


def test_normalize_ideas_skips_unusable_elements():
    raw = '{"ideas": [42, null, ["x"], {"title": "", "subtitle": ""}, "Válida: sim"]}'
    assert normalize_ideas(raw, 5) == ["Válida — sim"]


def test_normalize_ideas_caps_at_expected_count_and_keeps_order():
    raw = '{"ideas": ["A: 1", "B: 2", "C: 3", "D: 4"]}'
    assert normalize_ideas(raw, 2) == ["A — 1", "B — 2"]


def test_normalize_ideas_short_result_is_returned():
    raw = '{"ideas": [{"title": "Única", "subtitle": "ideia"}]}'
    assert normalize_ideas(raw, 5) == ["Única — ideia"]


def test_normalize_ideas_respects_max_chars():
    raw = '{"ideas": [{"title": "T", "subtitle": "%s"}]}' % ("a" * 1000)
    ideas = normalize_ideas(raw, 1, max_chars=400)
    assert len(ideas[0]) == 400


@pytest.mark.parametrize("raw", [
    "",
    None,
    "não é json",
    '{"ideas": []}',
    '{"other": [1, 2]}',
    '"just a string"',
])
def test_normalize_ideas_zero_results_raise(raw):
    with pytest.raises(UpstreamUnparseableError):
        normalize_ideas(raw, 3)


def test_empty_result_error_maps_to_502():
    assert EmptyResultError is UpstreamUnparseableError
    assert UpstreamUnparseableError.status_code == 502


def test_parse_ideas_strict_exact_count():
    raw = '```json\n{"ideas": ["  primeira  ", "segunda", "terceira", "quarta"]}\n```'
    assert parse_ideas_strict(raw, 3) == ["primeira", "segunda", "terceira"]


def test_parse_ideas_strict_truncates_each_idea():
    raw = '{"ideas": ["%s"]}' % ("b" * 600)
    assert parse_ideas_strict(raw, 1, max_chars=400) == ["b" * 400]


def test_parse_ideas_strict_insufficient():
    with pytest.raises(InsufficientResultsError) as excinfo:
        parse_ideas_strict('{"ideas": ["uma", "  ", 7]}', 3)
    assert excinfo.value.expected == 3
    assert excinfo.value.received == 1
    assert excinfo.value.status_code == 502


def test_parse_ideas_strict_rejects_other_shapes():
    with pytest.raises(UpstreamUnparseableError):
        parse_ideas_strict('["a", "b"]', 2)
    with pytest.raises(UpstreamUnparseableError):
        parse_ideas_strict('{"ideas": []}', 2)
    with pytest.raises(UpstreamUnparseableError):
        parse_ideas_strict("texto livre", 1)


def test_strict_and_lenient_diverge_on_short_output():
    raw = '{"ideas": ["Só uma: ideia"]}'
    assert normalize_ideas(raw, 3) == ["Só uma — ideia"]
    with pytest.raises(InsufficientResultsError):
        parse_ideas_strict(raw, 3)


def test_plain_strings_round_trip():
    assert normalize_ideas('{"ideas": ["a", "b", "c"]}', 3) == ["a", "b", "c"]
    assert normalize_ideas('{"ideas": ["My Idea — A longer description"]}', 1) == ["My Idea — A longer description"]
    assert normalize_ideas('{"ideas": ["JustATitleNoSeparator"]}', 1) == ["JustATitleNoSeparator"]


def test_fenced_and_unfenced_normalize_identically():
    body = '{"ideas": [{"title": "A", "subtitle": "b"}, "C: d"]}'
    assert normalize_ideas("```json\n" + body + "\n```", 3) == normalize_ideas(body, 3)


def test_every_idea_is_bounded_and_trimmed():
    raw = '{"ideas": ["%s", {"title": "T", "subtitle": "%s"}]}' % ("y " * 300, "z " * 300)
    for idea in normalize_ideas(raw, 2, max_chars=120):
        assert len(idea) <= 120
        assert idea == idea.rstrip()
