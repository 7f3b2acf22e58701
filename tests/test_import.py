"""Verify package imports work correctly."""


def test_import_sobre() -> None:
    """Test that sobre can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import sobre

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert sobre.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from sobre import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names_resolve() -> None:
    import sobre

    missing = [name for name in sobre.__all__ if not hasattr(sobre, name)]
    assert missing == []


def test_builtin_plugins_registered() -> None:
    from sobre.plugins import BUILTIN_PLUGINS

    assert set(BUILTIN_PLUGINS) == {"autoemail", "strikethrough"}
