from app.services.image_service import (
    find_image_references,
    is_local_reference,
    missing_local_images,
    process_image_references,
)


def test_find_image_references_lists_markdown_and_html_in_order():
    content = (
        "Intro ![diagram](/assets/signal.png)\n"
        '<img class="wide" src="/assets/motion.gif">\n'
        '![remote](https://cdn.example.com/a.jpg "Title")\n'
    )

    assert find_image_references(content) == [
        "/assets/signal.png",
        "/assets/motion.gif",
        "https://cdn.example.com/a.jpg",
    ]


def test_find_image_references_ignores_fenced_code():
    content = (
        "Text\n"
        "```swift\n"
        'let s = "![not](/assets/fake.png)"\n'
        "```\n"
        "![real](/assets/real.png)\n"
    )

    assert find_image_references(content) == ["/assets/real.png"]


def test_is_local_reference():
    assert is_local_reference("/assets/a.png") is True
    assert is_local_reference("//cdn.example.com/a.png") is False
    assert is_local_reference("https://example.com/a.png") is False
    assert is_local_reference("images/a.png") is False


def test_missing_local_images_checks_site_root(tmp_path):
    (tmp_path / "assets").mkdir()
    (tmp_path / "assets" / "here.png").write_bytes(b"png")
    content = "![a](/assets/here.png?v=2) ![b](/assets/gone.png) ![c](http://x/y.png)"

    assert missing_local_images(content, tmp_path) == ["/assets/gone.png"]


def test_process_image_references_absolutizes_local_sources():
    content = '![alt](/assets/a.png) and <img src="/assets/b.png"> and ![x](https://cdn/c.png)'

    out = process_image_references(content, "https://blog.example.com/")

    assert out == (
        "![alt](https://blog.example.com/assets/a.png) and "
        '<img src="https://blog.example.com/assets/b.png"> and '
        "![x](https://cdn/c.png)"
    )


def test_process_image_references_keeps_alt_text_that_matches_src():
    content = "![/assets/a.png](/assets/a.png)"

    out = process_image_references(content, "http://host")

    assert out == "![/assets/a.png](http://host/assets/a.png)"


def test_process_image_references_leaves_fenced_code_alone():
    content = (
        "![hero](/assets/hero.png)\n"
        "```markdown\n"
        "![logo](/assets/logo.png)\n"
        '<img src="/assets/logo.png">\n'
        "```\n"
        "![tail](/assets/tail.png)\n"
    )

    out = process_image_references(content, "https://blog.example")

    assert out == (
        "![hero](https://blog.example/assets/hero.png)\n"
        "```markdown\n"
        "![logo](/assets/logo.png)\n"
        '<img src="/assets/logo.png">\n'
        "```\n"
        "![tail](https://blog.example/assets/tail.png)\n"
    )
