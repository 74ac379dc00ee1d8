import re

import pytest

from gen_decoder import gen_decoder_module, gen_partial_decoder, partial_decoder_terms
from ngen_params import derive

SIZES = [4, 8, 16, 32, 64, 128]
ASSIGN = re.compile(r"^(col|row)\((\d+)\)\s*<= (.*);$", re.M)
TERM = re.compile(r"(not )?input\((\d+)\)")
GRID = re.compile(r"^result\((\d+)\) <= col\((\d+)\) and row\((\d+)\);$", re.M)


def parse_partials(text):
    tables = {"col": {}, "row": {}}
    for name, idx, expr in ASSIGN.findall(text):
        tables[name][int(idx)] = [(int(bit), not neg) for neg, bit in TERM.findall(expr)]
    return tables


def evaluate(terms, value):
    return all(((value >> bit) & 1) == int(pos) for bit, pos in terms)


@pytest.mark.parametrize("n", SIZES)
def test_decoder_is_one_hot_bijection(n):
    d = derive(n)
    text = gen_decoder_module(d)
    tables = parse_partials(text)
    grid = [(int(p), int(i), int(j)) for p, i, j in GRID.findall(text)]

    assert sorted(tables["col"]) == list(range(d.k))
    assert sorted(tables["row"]) == list(range(d.q))
    assert sorted(p for p, _, _ in grid) == list(range(n))
    assert all(p == d.q * i + j for p, i, j in grid)

    for value in range(n):
        col = {i: evaluate(t, value) for i, t in tables["col"].items()}
        row = {j: evaluate(t, value) for j, t in tables["row"].items()}
        result = [p for p, i, j in grid if col[i] and row[j]]
        assert result == [value]


@pytest.mark.parametrize("max_out, upper, lower", [(4, 1, 0), (4, 3, 2), (2, 2, 2), (16, 7, 4)])
def test_partial_terms(max_out, upper, lower):
    rows = partial_decoder_terms(max_out, upper, lower)
    assert [i for i, _ in rows] == list(range(max_out - 1, -1, -1))
    for i, terms in rows:
        assert [bit for bit, _ in terms] == list(range(upper, lower - 1, -1))
        value = sum(1 << (bit - lower) for bit, pos in terms if pos)
        assert value == i


def test_partial_decoder_text():
    lines = gen_partial_decoder("row", 4, 1, 0)
    assert lines == [
        "row(3) <= input(1) and input(0);",
        "row(2) <= input(1) and not input(0);",
        "row(1) <= not input(1) and input(0);",
        "row(0) <= not input(1) and not input(0);",
    ]


def test_n16_uses_two_4_way_decoders():
    d = derive(16)
    tables = parse_partials(gen_decoder_module(d))
    assert len(tables["col"]) == 4 and len(tables["row"]) == 4
    assert all([b for b, _ in t] == [3, 2] for t in tables["col"].values())
    assert all([b for b, _ in t] == [1, 0] for t in tables["row"].values())


def test_entity_and_output():
    text = gen_decoder_module(derive(8))
    assert "entity decoder_8 is" in text
    assert "  output: out std_logic_vector(g_n - 1 downto 0) -- decoded result (C_i)" in text
    assert "output <= result;" in text
    assert "generate" not in text
