import json

from permga.cli import Options, main_cbp, main_tip, parse_arguments

TIP_TEXT = """4 5
1 2 3 4 x
2
0 1 0 2
1 0 3 0
0 3 0 1
2 0 1 0
"""

CBP_TEXT = "header line\n4 0 4\n1 2\n2 3\n3 4\n4 1\n"

SMALL = ["--p=10", "--maxGens=5", "--maxGensWithoutImprovement=5", "--seed=3"]


def test_defaults():
    options = parse_arguments([])
    assert options == Options()
    assert options.p == 1000
    assert options.seed == 123
    assert options.wheel_bias == 50.0


def test_parse_values():
    options = parse_arguments(
        ["--filePath=data.txt", "--p=50", "--pe=0.25", "--maxGensWithoutImprovement=77",
         "--crossoverType=3", "--normalizePermutation=1"]
    )
    assert options.file_path == "data.txt"
    assert options.p == 50
    assert options.pe == 0.25
    assert options.max_gens_without_improvement == 77
    assert options.max_gens == Options().max_gens
    assert options.crossover_type == 3
    assert options.normalize_permutation is True


def test_numeric_prefixes():
    options = parse_arguments(["--seed=12xyz", "--pm=abc", "--wheelBias=2.5e1q"])
    assert options.seed == 12
    assert options.pm == 0.0
    assert options.wheel_bias == 25.0


def test_unknown_arguments_ignored():
    assert parse_arguments(["--bogus=1", "positional"]) == Options()


def test_main_tip(tmp_path, capsys):
    path = tmp_path / "tip.txt"
    path.write_text(TIP_TEXT)
    code = main_tip([f"--filePath={path}", *SMALL])
    parsed = json.loads(capsys.readouterr().out)
    assert code == 0
    assert parsed["instance"]["filePath"] == str(path)
    assert parsed["parameters"]["n"] == 4
    assert parsed["parameters"]["p"] == 10
    for item in parsed["top_individuals"]:
        assert sorted(item["permutation"]) == list(range(4))


def test_main_cbp(tmp_path, capsys):
    path = tmp_path / "cbp.txt"
    path.write_text(CBP_TEXT)
    code = main_cbp([f"--filePath={path}", *SMALL])
    parsed = json.loads(capsys.readouterr().out)
    assert code == 0
    assert "instance" not in parsed
    assert parsed["parameters"]["seed"] == 3
    assert parsed["convergence"]


def test_missing_file(tmp_path, capsys):
    code = main_tip([f"--filePath={tmp_path / 'absent.txt'}"])
    assert code == 1
    assert "error" in capsys.readouterr().err