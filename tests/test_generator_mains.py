import sys

import pytest

import gen_barrel_shifter
import gen_decoder
import gen_encoder
import gen_multiplier


@pytest.mark.parametrize("module, entity", [
    (gen_encoder, "priority_encoder_16"),
    (gen_barrel_shifter, "barrel_shifter_16"),
    (gen_decoder, "decoder_16"),
    (gen_multiplier, "multiplier_16"),
])
def test_main_writes_into_new_directory(monkeypatch, tmp_path, module, entity):
    out = tmp_path / "rtl" / "nested" / f"{entity}_ngen.vhd"
    monkeypatch.setattr(sys, "argv", [module.__name__, "--n", "16", "--out", str(out)])
    module.main()
    assert out.read_bytes().startswith(b"library IEEE;\n")
    assert f"entity {entity} is" in out.read_text(encoding="utf-8")


def test_main_prints_without_out(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["gen_decoder", "--n", "4"])
    gen_decoder.main()
    assert "entity decoder_4 is" in capsys.readouterr().out
