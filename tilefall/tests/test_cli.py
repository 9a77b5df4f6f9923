"""
Tests for the command-line interface.
"""

from ..cli import main


class TestCli:

    def test_simulate_plays_to_game_over(self, tmp_path, capsys):
        scores = tmp_path / "highscore.json"
        code = main(["--highscore-file", str(scores), "simulate", "--seed", "3"])

        out = capsys.readouterr().out
        assert code in (0, 2)
        assert "Platform 7x7, 8 bot(s)" in out
        assert ("You Won!" in out) == (code == 0)

    def test_small_game_with_fewer_bots(self, tmp_path, capsys):
        scores = tmp_path / "highscore.json"
        code = main([
            "--highscore-file", str(scores),
            "simulate", "--seed", "1", "--width", "5", "--height", "5", "--bots", "2",
        ])
        assert code in (0, 2)
        assert "Platform 5x5, 2 bot(s)" in capsys.readouterr().out

    def test_invalid_config_fails(self, tmp_path, capsys):
        code = main(["--highscore-file", str(tmp_path / "h.json"), "simulate", "--width", "0"])
        assert code == 1
        assert "Error" in capsys.readouterr().out

    def test_highscore_command(self, tmp_path, capsys):
        scores = tmp_path / "highscore.json"
        scores.write_text('{"highscore": 12}')

        assert main(["--highscore-file", str(scores), "highscore"]) == 0
        assert "12 turns" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "tilefall" in capsys.readouterr().out
