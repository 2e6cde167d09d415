import json

import pytest

from txfilter.core.builder import FilterBuilder
from txfilter.core.definitions import apply_steps, build_filter, parse_uint, render_filters
from txfilter.core.exceptions import AddressParseError, DefinitionError
from txfilter.core.nodes import Operator

ROUTER = "0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D"
AGGREGATOR = "0x1111111254fb6c44bac0bed2854e76f90643097d"

SWAP_STEPS = [
    {"op": "or"},
    {"op": "to", "arg": ROUTER},
    {"op": "and"},
    {"op": "sender", "arg": AGGREGATOR},
    {"op": "method", "arg": "0x38ed1739"},
    {"op": "exit"},
    {"op": "value", "arg": "1000000000000000000"},
]


@pytest.mark.parametrize(
    "value,expected",
    [(10, 10), ("10000", 10000), ("0x2710", 10000), (" 42 ", 42), (str(2**200), 2**200)],
)
def test_parse_uint(value, expected):
    assert parse_uint(value) == expected


@pytest.mark.parametrize("value", [True, "ten", 1.5, None, "0xzz"])
def test_parse_uint_rejects(value):
    with pytest.raises(DefinitionError):
        parse_uint(value)


def test_apply_steps_matches_fluent_calls():
    replayed = apply_steps(FilterBuilder(), SWAP_STEPS).build()
    fluent = (FilterBuilder()
              .or_group()
              .with_recipient(ROUTER)
              .and_group()
              .with_sender(AGGREGATOR)
              .with_method("0x38ed1739")
              .exit()
              .with_value(10**18)
              .build())
    assert replayed == fluent


def test_apply_steps_op_names_are_case_insensitive():
    tree = apply_steps(FilterBuilder(), [{"op": "AND"}, {"op": "Recipient", "arg": ROUTER}]).build()
    assert tree.root.operator is Operator.AND
    assert len(tree.root.children) == 1


@pytest.mark.parametrize(
    "steps",
    [
        {"op": "and"},
        [["and"]],
        [{"arg": ROUTER}],
        [{"op": "xor"}],
        [{"op": "to"}],
        [{"op": "value", "arg": "lots"}],
    ],
)
def test_apply_steps_rejects_malformed(steps):
    with pytest.raises(DefinitionError):
        apply_steps(FilterBuilder(), steps)


def test_apply_steps_chains_input_errors():
    with pytest.raises(DefinitionError) as exc_info:
        apply_steps(FilterBuilder(), [{"op": "and"}, {"op": "from", "arg": "nope"}])
    assert "Step 1 (from)" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, AddressParseError)


def test_build_filter_uses_builder_options(write_config):
    steps = [
        {"op": "to", "arg": ROUTER},
        {"op": "or"},
        {"op": "and"},
        {"op": "exit"},
        {"op": "exit"},
        {"op": "value", "arg": 1},
    ]
    stacked = build_filter(write_config({"filters": {"f": {"steps": steps}}}), "f")
    single = build_filter(
        write_config({"builder": {"nesting": "single"}, "filters": {"f": {"steps": steps}}}),
        "f",
    )

    assert len(stacked.root.children) == 3
    assert len(single.root.children) == 2


def test_build_filter_unknown_name(write_config):
    with pytest.raises(DefinitionError):
        build_filter(write_config({"filters": {}}), "missing")


def test_render_filters(write_config):
    config = write_config({
        "filters": {
            "swaps": {"steps": SWAP_STEPS, "pretty": True},
            "transfers": {"steps": [{"op": "to", "arg": ROUTER}]},
        }
    })
    rendered = render_filters(config)

    assert list(rendered) == ["swaps", "transfers"]
    assert "\n" in rendered["swaps"]
    assert "\n" not in rendered["transfers"]
    assert json.loads(rendered["transfers"])["Root"]["Operand"]["Key"] == "to"


def test_render_filters_global_pretty(write_config):
    config = write_config({
        "output": {"pretty": True},
        "filters": {"one": {"steps": [{"op": "value", "arg": 1}]}},
    })
    assert "\n" in render_filters(config)["one"]


def test_render_filters_rejects_non_table_definition(write_config):
    config = write_config({"filters": {"bad": "not a table"}})
    with pytest.raises(DefinitionError):
        render_filters(config)
    with pytest.raises(DefinitionError):
        build_filter(config, "bad")


@pytest.mark.parametrize("definition", [{"pretty": True}, {"steps": "to"}])
def test_build_filter_requires_steps_list(write_config, definition):
    config = write_config({"filters": {"nosteps": definition}})
    with pytest.raises(DefinitionError):
        build_filter(config, "nosteps")
    with pytest.raises(DefinitionError):
        render_filters(config)


def test_build_filter_allows_empty_steps(write_config):
    tree = build_filter(write_config({"filters": {"empty": {"steps": []}}}), "empty")
    assert tree.root is None


@pytest.mark.parametrize("options", [{"nesting": "deep"}, {"leaf_root": "ignore"}])
def test_bad_builder_options_raise_definition_error(write_config, options):
    config = write_config({
        "builder": options,
        "filters": {"one": {"steps": [{"op": "value", "arg": 1}]}},
    })
    with pytest.raises(DefinitionError):
        render_filters(config)


def test_non_table_sections(write_config):
    with pytest.raises(DefinitionError):
        render_filters(write_config({"filters": "everything"}))
    with pytest.raises(DefinitionError):
        build_filter(
            write_config({"builder": "stack", "filters": {"one": {"steps": []}}}), "one"
        )
