"""Shared test fixtures for textcat tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from textcat.category import Categories

ENGLISH_SAMPLE = (
    "The quick brown fox jumps over the lazy dog. The dog was not amused, "
    "and the fox ran back into the forest where the trees were tall and the "
    "light was soft. There is nothing better than a walk in the woods."
)

SPANISH_SAMPLE = (
    "El rápido zorro marrón salta sobre el perro perezoso. El perro no estaba "
    "contento, y el zorro volvió corriendo al bosque donde los árboles eran "
    "altos y la luz era suave. No hay nada mejor que un paseo por el bosque."
)


@pytest.fixture
def english_sample() -> str:
    return ENGLISH_SAMPLE


@pytest.fixture
def spanish_sample() -> str:
    return SPANISH_SAMPLE


@pytest.fixture
def samples_dir(tmp_path: Path) -> Path:
    """Directory with one sample file per category plus an unrelated file."""
    directory = tmp_path / "samples"
    directory.mkdir()
    (directory / "english.sample").write_text(ENGLISH_SAMPLE, encoding="utf-8")
    (directory / "spanish.sample").write_text(SPANISH_SAMPLE, encoding="utf-8")
    (directory / "README.txt").write_text("not a sample", encoding="utf-8")
    return directory


@pytest.fixture
def trained_store() -> Categories[str]:
    """Store trained on the short English and Spanish samples."""
    store: Categories[str] = Categories()
    store.add_category("english", ENGLISH_SAMPLE)
    store.add_category("spanish", SPANISH_SAMPLE)
    return store


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove TEXTCAT_* variables and run from an empty directory (no .env)."""
    for name in (
        "TEXTCAT_PROFILES",
        "TEXTCAT_THRESHOLD",
        "TEXTCAT_SAMPLE_EXTENSION",
        "TEXTCAT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
