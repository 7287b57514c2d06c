from pathlib import Path

import pytest

from wikigraph.config import (
    SiteConfig,
    detect_content_dir,
    find_config,
    load_config,
)


def _write_config(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_load_config_resolves_relative_paths(tmp_path: Path) -> None:
    cfg = load_config(
        _write_config(
            tmp_path / "wikigraph.toml",
            "\n".join(
                [
                    'content_dir = "docs/pages"',
                    'extensions = ["md", ".mdx"]',
                    'out_dir = "public/data"',
                    "",
                    "[graph]",
                    "depth = 3",
                    'relation_types = ["ntpp", "eq"]',
                    "",
                ]
            ),
        )
    )
    root = tmp_path.resolve()
    assert cfg.content_dir == root / "docs" / "pages"
    assert cfg.out_dir == root / "public" / "data"
    assert cfg.extensions == (".md", ".mdx")
    assert cfg.graph.depth == 3
    assert cfg.graph.relation_types == ("ntpp", "eq")


def test_load_config_defaults(tmp_path: Path) -> None:
    cfg = load_config(_write_config(tmp_path / "wikigraph.toml", ""))
    defaults = SiteConfig()
    assert cfg.content_dir is None
    assert cfg.extensions == defaults.extensions
    assert cfg.graph == defaults.graph


@pytest.mark.parametrize(
    "text",
    [
        "[graph]\ndepth = -1\n",
        "[graph]\ndepth = true\n",
        '[graph]\nrelation_types = ["ntpp", "nttpi"]\n',
        'extensions = ".md"\n',
        "extensions = []\n",
        'content_dir = ""\n',
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, text: str) -> None:
    with pytest.raises(ValueError):
        load_config(_write_config(tmp_path / "wikigraph.toml", text))


def test_find_config_walks_up(tmp_path: Path) -> None:
    cfg = _write_config(tmp_path / "wikigraph.toml", "")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config(nested) == cfg.resolve()


def test_detect_content_dir_prefers_astro_layout(tmp_path: Path) -> None:
    (tmp_path / "content").mkdir()
    pages = tmp_path / "src" / "content" / "pages"
    pages.mkdir(parents=True)
    nested = tmp_path / "tools"
    nested.mkdir()
    assert detect_content_dir(nested) == pages.resolve()
