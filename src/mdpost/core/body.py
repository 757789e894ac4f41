"""Read-only inspection of post bodies via markdown-it tokens"""

from dataclasses import dataclass

from markdown_it import MarkdownIt


@dataclass(frozen=True)
class CodeBlock:
    language: str | None
    code: str


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def fenced_blocks(body: str, parser_config: str = 'gfm-like') -> list[CodeBlock]:
    """Return fenced code blocks in order, tagged with the first word of their info string."""
    blocks = []
    for tok in _make_parser(parser_config).parse(body):
        if tok.type != 'fence':
            continue
        info = tok.info.strip()
        blocks.append(CodeBlock(language=info.split()[0] if info else None, code=tok.content))
    return blocks


def links(body: str, parser_config: str = 'gfm-like') -> list[str]:
    """Return inline link targets in document order."""
    hrefs = []
    for tok in _make_parser(parser_config).parse(body):
        if tok.type != 'inline' or not tok.children:
            continue
        for child in tok.children:
            if child.type == 'link_open':
                href = child.attrGet('href')
                if href:
                    hrefs.append(str(href))
    return hrefs


def code_languages(body: str, parser_config: str = 'gfm-like') -> list[str]:
    """Distinct fenced-block languages, first occurrence order."""
    return list(dict.fromkeys(b.language for b in fenced_blocks(body, parser_config) if b.language))
