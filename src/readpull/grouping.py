"""Tag classification tables used by the tree builder and serializer."""

import re

# Tags that start a new paragraph when serialized to plain text
BLOCK_TAGS = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "body",
        "center",
        "dd",
        "details",
        "dialog",
        "dir",
        "div",
        "dl",
        "dt",
        "fieldset",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "header",
        "hgroup",
        "hr",
        "li",
        "main",
        "menu",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "summary",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
    }
)

# Void elements: closed as soon as they are opened
AUTOCLOSE_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose content never reaches the tree
SKIP_TAGS = frozenset(
    {
        "canvas",
        "head",
        "iframe",
        "math",
        "noscript",
        "object",
        "script",
        "select",
        "style",
        "svg",
        "template",
        "textarea",
    }
)

# Elements whose whole subtree is demoted as low-value content
BAD_TAGS = frozenset(
    {
        "aside",
        "button",
        "footer",
        "form",
        "menu",
        "nav",
    }
)

HYPERLINK_TAGS = frozenset({"a"})

# Matched against class and id values
BAD_ATTRIBUTE_PATTERN = (
    r"(?:^|[\s_-])(?:ad|ads|advert\w*|banner|breadcrumbs?|combx|comments?|community|"
    r"cookie\w*|disqus|extra|foot(?:er)?|menu|meta|nav\w*|newsletter|pager|"
    r"pagination|popup|promo\w*|related|remark|rss|share|shoutbox|sidebar|"
    r"social|sponsor\w*|subscribe|tags?|tool(?:s|bar)?|widgets?)(?:$|[\s_-])"
)

BAD_ATTRIBUTES = frozenset({"class", "id"})


def compile_bad_attribute_pattern(pattern: str = BAD_ATTRIBUTE_PATTERN) -> "re.Pattern[str]":
    """Compile a class/id pattern case-insensitively."""
    return re.compile(pattern, re.IGNORECASE)
