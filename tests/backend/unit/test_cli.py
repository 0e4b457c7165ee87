from letteravatar.cli import main


def test_cli_writes_svg_to_file(tmp_path) -> None:
    output = tmp_path / "jane.svg"

    exit_code = main(["--email", "jane.doe@example.com", "--output", str(output)])

    assert exit_code == 0
    content = output.read_bytes()
    assert content.startswith(b"<svg")
    assert b">JA</text>" in content


def test_cli_writes_png_with_fixed_color(tmp_path) -> None:
    output = tmp_path / "bob.png"

    exit_code = main(
        [
            "--username",
            "bob",
            "--method",
            "fixed",
            "--color",
            "1e90ff",
            "--shape",
            "square",
            "--format",
            "png",
            "--size",
            "32",
            "--output",
            str(output),
        ]
    )

    assert exit_code == 0
    assert output.read_bytes().startswith(b"\x89PNG")


def test_cli_reports_missing_identity(capsys) -> None:
    exit_code = main([])

    assert exit_code == 1
    assert "Could not render avatar" in capsys.readouterr().err
