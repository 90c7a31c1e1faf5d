import pytest


@pytest.fixture
def messy_markdown():
    """A document exercising every repair and formatter."""
    return (
        "#Title\n"
        "Intro paragraph.\n"
        "##Section##\n"
        "-First\n"
        "-Second\n"
        "\n"
        "Name|Age\n"
        "---|---\n"
        "Alice|30\n"
        "\n"
        "```python\n"
        "def f():\n"
        "    return  1   # spacing kept\n"
        "```\n"
    )


@pytest.fixture
def md_file(tmp_path):
    """Write a small unformatted markdown file and return its path."""
    path = tmp_path / "doc.md"
    path.write_text("#Title\n-Item\n", encoding="utf-8")
    return path


@pytest.fixture
def config_yaml(tmp_path):
    """Write a partial config YAML and return its path."""
    content = """
tables:
  padding: 2
lists:
  marker: "*"
  indent_size: 4
code:
  fence_style: "~~~"
"""
    path = tmp_path / "beautiful-md.yaml"
    path.write_text(content, encoding="utf-8")
    return path
