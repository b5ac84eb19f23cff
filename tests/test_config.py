import textwrap
from pathlib import Path

import pytest

from RenderPost.config import DEFAULT_MATH_TEMPLATE, CompilerConfig, load_config


def test_defaults_without_file():
    config = load_config(None)
    assert config == CompilerConfig()
    assert "{{content}}" in config.math_template
    assert config.latex_command == "latex"


def test_load_config_resolves_relative_paths(tmp_path: Path):
    (tmp_path / "templates").mkdir()
    (tmp_path / "templates" / "post.html").write_text("<t>{{title}}</t>{{content}}", encoding="utf-8")
    config_path = tmp_path / "renderpost.yaml"
    config_path.write_text(
        textwrap.dedent(
            """
            images_dir: static/images
            post_template: templates/post.html
            dvisvgm_command: /opt/tex/bin/dvisvgm
            timeout: 12
            """
        ),
        encoding="utf-8",
    )
    config = load_config(config_path)
    assert config.images_dir == tmp_path / "static/images"
    assert config.post_template == "<t>{{title}}</t>{{content}}"
    assert config.math_template == DEFAULT_MATH_TEMPLATE
    assert config.dvisvgm_command == "/opt/tex/bin/dvisvgm"
    assert config.timeout == 12.0


def test_empty_file_gives_defaults(tmp_path: Path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("", encoding="utf-8")
    assert load_config(config_path) == CompilerConfig()


@pytest.mark.parametrize(
    "body",
    [
        "- just\n- a list\n",
        "image_dir: typo\n",
        "timeout: 0\n",
        "timeout: soon\n",
    ],
)
def test_invalid_config(tmp_path: Path, body):
    config_path = tmp_path / "bad.yaml"
    config_path.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(config_path)
