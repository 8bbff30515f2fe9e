"""Render and escape math in 3 lines — no config needed."""

from mathfence import MathConfig, process

print(process("Euler: $e^{i\\pi} + 1 = 0$", MathConfig(no_css=True)))
print(process("Euler: $e^{i\\pi} + 1 = 0$", MathConfig(pre_render=False, no_css=True)))
