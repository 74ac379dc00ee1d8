import re

import pytest

from gen_barrel_shifter import (coarse_branch, coarse_shift_amounts, fine_branch, fine_shift_amounts,
                                gen_barrel_shifter_module)
from ngen_params import derive

SIZES = [4, 8, 16, 32, 64, 128, 256]


def ladder(text, target):
    return text.split(f"{target} <=\n")[1].split("\n\n")[0].splitlines()


@pytest.mark.parametrize("n", SIZES)
def test_fine_ladder_is_exhaustive(n):
    d = derive(n)
    lines = ladder(gen_barrel_shifter_module(d), "fine_result")
    amounts = [int(a) for a in re.findall(r"when shamt_lower = (\d+)", "\n".join(lines))]
    assert amounts == fine_shift_amounts(d)
    assert len(set(amounts)) == len(amounts)
    # the final line is the amount-0 default
    assert "when" not in lines[-1]
    assert sorted(amounts + [0]) == list(range(d.q))


@pytest.mark.parametrize("n", SIZES)
def test_coarse_ladder_is_exhaustive(n):
    d = derive(n)
    lines = ladder(gen_barrel_shifter_module(d), "coarse_result")
    amounts = [int(a) for a in re.findall(r"when shamt_upper = (\d+)", "\n".join(lines))]
    assert amounts == coarse_shift_amounts(d)
    assert "when" not in lines[-1]
    assert sorted(amounts + [0]) == list(range(d.k))


@pytest.mark.parametrize("n", SIZES)
def test_branch_widths_are_uniform(n):
    d = derive(n)
    for i in range(d.q):
        branch = fine_branch(d, i)
        zeros = sum(len(z) for z in re.findall(r'"(0*)"', branch))
        assert zeros == d.q - 1
        assert branch.endswith('"' + "0" * i + '"') or i == 0
    for i in range(d.k):
        branch = coarse_branch(d, i)
        assert branch.count("q_0s") == d.k - 1
        assert branch.split(" & ").index("fine_result") == d.k - 1 - i


def test_n8_scenario():
    d = derive(8)
    text = gen_barrel_shifter_module(d)
    assert fine_shift_amounts(d) == [3, 2, 1]
    assert coarse_shift_amounts(d) == [1]
    assert '  input & "000" when shamt_lower = 3 else' in text
    assert '  "00" & input & "0" when shamt_lower = 1 else' in text
    assert '  "000" & input;' in text
    assert "  fine_result & q_0s when shamt_upper = 1 else" in text
    assert "  q_0s & fine_result;" in text


def test_n16_ladders():
    d = derive(16)
    assert fine_shift_amounts(d) == [3, 2, 1]
    assert coarse_shift_amounts(d) == [3, 2, 1]


def test_ports_and_output():
    text = gen_barrel_shifter_module(derive(16))
    assert "entity barrel_shifter_16 is" in text
    assert "  g_m:      integer := 16;" in text
    assert "shamt_upper <= shamt(g_log2n - 1 downto g_log2q);" in text
    assert "shamt_lower <= shamt(g_log2q - 1 downto 0);" in text
    assert "output <= '0' & coarse_result;" in text
