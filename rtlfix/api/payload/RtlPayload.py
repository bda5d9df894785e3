"""RTL fix payload rendered from packaged templates."""

from jinja2 import Environment, PackageLoader, StrictUndefined

# Unique text that identifies injected code
RTL_MARKER = "Claude RTL Fixer"


def _js_template_literal(text: str) -> str:
    """Escape text for use inside a JavaScript template literal."""
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("$", "\\$")


class RtlPayload:
    """Payload source: the text to inject and a predicate that detects it."""

    marker = RTL_MARKER

    def __init__(self) -> None:
        self._env = Environment(
            loader=PackageLoader("rtlfix.api.payload", "templates"),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._env.filters["js_template_literal"] = _js_template_literal

    def render(self) -> str:
        """Return the code appended to the preload script."""
        loader = self._env.loader
        css = loader.get_source(self._env, "rtl.css")[0]
        js = loader.get_source(self._env, "rtl.js")[0]
        return self._env.get_template("payload.js.j2").render(marker=self.marker, css=css, js=js)

    def is_patched(self, content: str) -> bool:
        return self.marker in content
