import re
from pathlib import Path

from RenderPost import markup_parser
from RenderPost.config import CompilerConfig
from RenderPost.math_renderer import TypesetError
from RenderPost.model import (
    CodeBlock,
    Document,
    FootnoteBlock,
    Heading,
    HtmlBlock,
    MathBlock,
    Paragraph,
    QuoteBlock,
    Style,
    TextRun,
)
from RenderPost.renderer_html import render_document


def _config():
    return CompilerConfig(images_dir=Path("static/images"))


def _fake_math(calls=None):
    def render(latex, display):
        if calls is not None:
            calls.append((latex, display))
        return f"<svg>{latex}</svg>"

    return render


def _render(text, math=None):
    document = markup_parser.parse_markdown(text)
    return render_document(document, _config(), math_renderer=math or _fake_math())


def test_bold_run_round_trip():
    html = render_document(
        Document(blocks=[Paragraph(runs=[TextRun("before "), TextRun("x", Style.BOLD), TextRun(" after")])]),
        _config(),
        math_renderer=_fake_math(),
    )
    match = re.search(r'<span class="bold">(.*?)</span>', html)
    assert match and match.group(1).strip() == "x"


def test_link_and_footnote_reference_rendering():
    html = _render("see [doc](http://x) and [^3]\n")
    assert html.count('<a href="http://x">doc</a>') == 1
    assert html.count('<sup id="ref3"><a href="#fn3">[3]</a></sup>') == 1


def test_image_width_default_has_no_style():
    html = _render("![a](b.png)\n")
    assert html == '<img src="static/images/b.png" alt="a" class="image">'
    assert "style=" not in html


def test_image_width_percentage():
    html = _render("![a](b.png){50}\n")
    assert 'style="width: 50%;"' in html


def test_headers_and_code():
    html = render_document(
        Document(
            blocks=[
                Heading(level=1, text="Top"),
                Heading(level=4, text="Sub"),
                CodeBlock(language="rust", code="a < b\n"),
            ]
        ),
        _config(),
        math_renderer=_fake_math(),
    )
    assert html == (
        "<h1>Top</h1>\n<hr><br>"
        "<h2>Sub</h2>\n"
        '<pre><code class="code-rust">a < b\n</code></pre>'
    )


def test_passthrough_quote_and_footnote():
    html = render_document(
        Document(
            blocks=[
                HtmlBlock(html="<div class='x'></div>"),
                QuoteBlock(text="wise words"),
                FootnoteBlock(id="2", runs=[TextRun("the "), TextRun("note", Style.ITALIC)]),
            ]
        ),
        _config(),
        math_renderer=_fake_math(),
    )
    assert "<div class='x'></div>" in html
    assert "<p class=quote>wise words</p>\n" in html
    assert '<p id="fn2"><a href="#ref2">[2]</a> the <span class="italic"> note </span></p>' in html


def test_math_display_flag_is_passed():
    calls = []
    html = _render("inline $x$ here\n\n\\[\ny\n\\]\n", math=_fake_math(calls))
    assert calls == [("x", False), ("y\n", True)]
    assert '<span class="inline-math"><svg>x</svg></span>' in html
    assert '<span class="display-math"><svg>y\n</svg></span>' in html


def test_math_failure_renders_error_marker():
    def failing(latex, display):
        raise TypesetError("! Undefined control sequence.")

    document = Document(
        blocks=[
            Paragraph(runs=[TextRun("before")]),
            MathBlock(latex="\\bad"),
            Paragraph(runs=[TextRun("y", Style.INLINE_MATH), TextRun(" after")]),
        ]
    )
    html = render_document(document, _config(), math_renderer=failing)
    assert html.count("<code class='latex-error'>LaTeX failed: ! Undefined control sequence.</code>") == 2
    assert html.startswith("<p>before</p>\n")
    assert html.endswith(" after</p>\n")


def test_inline_code_unescaped():
    html = _render("use `<br>` tags\n")
    assert '<span class="inline-code"><br></span>' in html


def test_rendering_is_idempotent():
    text = "# T\n\nA *b* _c_ $d$ [e](f) [^1]\n\n- x\n    - y\n\n[^1]: g\n"
    assert _render(text) == _render(text)


def test_image_url_sources_pass_through():
    assert 'src="http://x/a.png"' in _render("![a](http://x/a.png)\n")
    assert 'src="/abs/a.png"' in _render("![a](/abs/a.png)\n")
