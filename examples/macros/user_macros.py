"""User macros, expanded before latex2mathml sees the formula."""

from mathfence import Latex2MathMLEngine, MathConfig, parse_macros, process

macros = parse_macros("\\R:\\mathbb{R}^{#1}\n\\grad:\\nabla\n")
engine = Latex2MathMLEngine(macros)

print(process("$\\grad f \\in \\R{n}$", MathConfig(no_css=True), engine=engine))
