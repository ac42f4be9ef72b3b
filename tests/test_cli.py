"""Tests for the dirscan CLI."""

from pathlib import Path

from typer.testing import CliRunner

from dirscan.cli import app

runner = CliRunner()


def output_paths(output: str) -> list[str]:
    return [line for line in output.splitlines() if line.startswith("/")]


class TestList:
    def test_lists_root_only(self, sample_dir: Path):
        result = runner.invoke(app, ["list", str(sample_dir)])
        assert result.exit_code == 0
        assert output_paths(result.output) == [
            str(sample_dir / name) for name in ("a", "b", "c.jpg", "d.jpg", "d.pgm")
        ]

    def test_extension_option(self, sample_dir: Path):
        result = runner.invoke(app, ["list", str(sample_dir), "--ext", "jpg"])
        assert result.exit_code == 0
        assert output_paths(result.output) == [str(sample_dir / "c.jpg"), str(sample_dir / "d.jpg")]

    def test_other_user_home_rejected(self):
        result = runner.invoke(app, ["list", "~nobody/photos"])
        assert result.exit_code == 1
        assert "Error" in result.output


class TestWalk:
    def test_walks_subdirectories(self, sample_dir: Path):
        result = runner.invoke(app, ["walk", str(sample_dir), "-e", "pgm", "-e", "ppm"])
        assert result.exit_code == 0
        assert output_paths(result.output) == [
            str(sample_dir / "d.pgm"),
            str(sample_dir / "sub_dir" / "e.pgm"),
            str(sample_dir / "sub_dir" / "f.ppm"),
        ]

    def test_ignore_option(self, sample_dir: Path):
        result = runner.invoke(app, ["walk", str(sample_dir), "--ignore", "sub_dir/"])
        assert result.exit_code == 0
        paths = output_paths(result.output)
        assert len(paths) == 5
        assert not any("sub_dir" in p for p in paths)

    def test_dirscanignore_respected(self, sample_dir: Path):
        (sample_dir / ".dirscanignore").write_text("*.jpg\n")
        result = runner.invoke(app, ["walk", str(sample_dir)])
        paths = output_paths(result.output)
        assert str(sample_dir / "c.jpg") not in paths
        assert str(sample_dir / ".dirscanignore") in paths

    def test_no_ignore_files(self, sample_dir: Path):
        (sample_dir / ".dirscanignore").write_text("*.jpg\n")
        result = runner.invoke(app, ["walk", str(sample_dir), "--no-ignore-files"])
        assert str(sample_dir / "c.jpg") in output_paths(result.output)


class TestScan:
    def test_rules_choose_list(self, sample_dir: Path, tmp_path: Path):
        rules = tmp_path / "rules"
        rules.write_text("recursive no\nextension pgm ppm\n")
        result = runner.invoke(app, ["scan", str(sample_dir), "--rules", str(rules)])
        assert result.exit_code == 0
        assert output_paths(result.output) == [str(sample_dir / "d.pgm")]

    def test_config_chooses_walk(self, sample_dir: Path):
        result = runner.invoke(app, ["scan", str(sample_dir), "-e", "ppm"])
        assert result.exit_code == 0
        assert output_paths(result.output) == [str(sample_dir / "sub_dir" / "f.ppm")]

    def test_bad_rules_file(self, sample_dir: Path, tmp_path: Path):
        rules = tmp_path / "rules"
        rules.write_text("colour blue\n")
        result = runner.invoke(app, ["scan", str(sample_dir), "--rules", str(rules)])
        assert result.exit_code == 1
        assert "unknown variable" in result.output


class TestInit:
    def test_init_creates_config(self, tmp_path: Path):
        result = runner.invoke(app, ["init", str(tmp_path)])
        assert result.exit_code == 0
        assert (tmp_path / "config" / "dirscan.yaml").exists()
        assert (tmp_path / ".dirscanignore").exists()

    def test_init_doesnt_overwrite(self, tmp_path: Path):
        runner.invoke(app, ["init", str(tmp_path)])
        (tmp_path / "config" / "dirscan.yaml").write_text("scan:\n  recursive: false\n")
        result = runner.invoke(app, ["init", str(tmp_path)])
        assert result.exit_code == 0
        assert "exists" in result.output
        assert "recursive: false" in (tmp_path / "config" / "dirscan.yaml").read_text()


class TestStatus:
    def test_status_basic(self, tmp_path: Path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "dirscan.yaml").write_text("scan:\n  extensions: [jpg]\n")

        result = runner.invoke(app, ["status", str(tmp_path)])
        assert result.exit_code == 0
        assert "Recursive" in result.output
        assert "jpg" in result.output


class TestConfigErrors:
    def test_malformed_yaml(self, sample_dir: Path):
        config_dir = sample_dir / "config"
        config_dir.mkdir()
        (config_dir / "dirscan.yaml").write_text("scan: [unclosed\n")

        result = runner.invoke(app, ["walk", str(sample_dir)])
        assert result.exit_code == 1
        assert "Error" in result.output

        result = runner.invoke(app, ["status", str(sample_dir)])
        assert result.exit_code == 1
        assert "Error" in result.output
