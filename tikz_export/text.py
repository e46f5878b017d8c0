"""Escaping of label text for pgfplots markup.

``escape_text`` runs a fixed, order-sensitive pipeline. Stages that look at
``$...$`` spans split the text into alternating plain/math segments first, so
math content is never escaped and plain text is never treated as math.
"""

from __future__ import annotations

import re
from typing import Callable

from anyascii import anyascii

SYMBOL_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("α", r"${\alpha}$"),
    ("β", r"${\beta}$"),
    ("γ", r"${\gamma}$"),
    ("Γ", r"${\Gamma}$"),
    ("δ", r"${\delta}$"),
    ("Δ", r"${\Delta}$"),
    ("ϵ", r"${\epsilon}$"),
    ("ε", r"${\varepsilon}$"),
    ("ζ", r"${\zeta}$"),
    ("η", r"${\eta}$"),
    ("θ", r"${\theta}$"),
    ("ϑ", r"${\vartheta}$"),
    ("Θ", r"${\Theta}$"),
    ("ι", r"${\iota}$"),
    ("κ", r"${\kappa}$"),
    ("ϰ", r"${\kappa}$"),
    ("λ", r"${\lambda}$"),
    ("Λ", r"${\Lambda}$"),
    ("μ", r"${\mu}$"),
    ("µ", r"${\mu}$"),
    ("ν", r"${\nu}$"),
    ("ξ", r"${\xi}$"),
    ("π", r"${\pi}$"),
    ("Π", r"${\Pi}$"),
    ("ρ", r"${\rho}$"),
    ("ϱ", r"${\varrho}$"),
    ("σ", r"${\sigma}$"),
    ("ς", r"${\sigma}$"),
    ("Σ", r"${\Sigma}$"),
    ("τ", r"${\tau}$"),
    ("υ", r"${\upsilon}$"),
    ("Υ", r"${\Upsilon}$"),
    ("ϕ", r"${\phi}$"),
    ("φ", r"${\varphi}$"),
    ("Φ", r"${\Phi}$"),
    ("χ", r"${\chi}$"),
    ("ψ", r"${\psi}$"),
    ("Ψ", r"${\Psi}$"),
    ("ω", r"${\omega}$"),
    ("Ω", r"${\Omega}$"),
    ("±", r"${\pm}$"),
    ("∓", r"${\mp}$"),
    ("≈", r"${\approx}$"),
    ("∼", r"${\sim}$"),
    ("≅", r"${\cong}$"),
    ("≠", r"${\neq}$"),
    ("⊕", r"${\oplus}$"),
    ("×", r"${\times}$"),
    ("∇", r"${\nabla}$"),
    ("→", r"${\rightarrow}$"),
    ("←", r"${\leftarrow}$"),
    ("⇒", r"${\Rightarrow}$"),
    ("⇐", r"${\Leftarrow}$"),
    ("↔", r"${\leftrightarrow}$"),
    ("⇔", r"${\Leftrightarrow}$"),
    ("↦", r"${\mapsto}$"),
)

_MATH_SPAN = re.compile(r"(\$[^$]*\$)")
_SCIENTIFIC = re.compile(r"(\d+)\^([{}\d+\-]+)")
_BARE_SUBSCRIPT = re.compile(r"\b(\w+_\w)\b")
_BARE_SUPERSCRIPT = re.compile(r"\b(\w+\^\w)\b")
_BRACED_SUBSCRIPT = re.compile(r"(\w+_\{\w+\})")
_BRACED_SUPERSCRIPT = re.compile(r"(\w+\^\{\w+\})")
_SPECIAL = re.compile(r"([{}_^])")
_LONE_BACKSLASH = re.compile(r"\\(?=[^{}_^])")
_TRIVIAL_MATH_JOIN = re.compile(r"\$([\^_ +\-*/]*)\$")
_ESCAPED_BRACE = re.compile(r"\\([{}]+)")


def escape_text(text: str) -> str:
    for symbol, replacement in SYMBOL_REPLACEMENTS:
        text = text.replace(symbol, replacement)

    # 10^5 -> ${10^{5}}$
    text = _map_plain(text, lambda s: _SCIENTIFIC.sub(r"${\1^{\2}}$", s))

    text = _map_plain(text, lambda s: _BARE_SUBSCRIPT.sub(r"$\1$", s))
    text = _map_plain(text, lambda s: _BARE_SUPERSCRIPT.sub(r"$\1$", s))
    text = _map_plain(text, lambda s: _BRACED_SUBSCRIPT.sub(r"$\1$", s))
    text = _map_plain(text, lambda s: _BRACED_SUPERSCRIPT.sub(r"$\1$", s))

    text = _map_plain(text, lambda s: _SPECIAL.sub(r"\\\1", s))

    text = _LONE_BACKSLASH.sub(r"\\\\", text)
    # macros from the symbol table must stay single-escaped
    text = text.replace("{\\\\", "{\\")

    text = _TRIVIAL_MATH_JOIN.sub(r"\1", text)
    text = _map_math(text, lambda s: _ESCAPED_BRACE.sub(r"\1", s))

    return anyascii(text)


def _map_plain(text: str, func: Callable[[str], str]) -> str:
    parts = _MATH_SPAN.split(text)
    return "".join(func(part) if i % 2 == 0 else part for i, part in enumerate(parts))


def _map_math(text: str, func: Callable[[str], str]) -> str:
    parts = _MATH_SPAN.split(text)
    return "".join(part if i % 2 == 0 else "$" + func(part[1:-1]) + "$" for i, part in enumerate(parts))
