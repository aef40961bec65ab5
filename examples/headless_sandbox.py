# examples/headless_sandbox.py
from rope_sim import Sandbox, Inputs, Button
from rope_sim.renderer import BufferedRenderer

sb = Sandbox()
inputs = Inputs()


def frame(pressed, mouse, dt=1 / 60):
    inputs.update(pressed, mouse)
    sb.update(dt, inputs)


# place two points, lock the first, link them
for pos in [(200, 100), (260, 100)]:
    frame({Button.LEFT_MOUSE}, pos)
    frame(set(), pos)
frame({Button.LEFT_MOUSE}, (200, 100))
frame(set(), (200, 100))
frame({Button.LEFT_MOUSE}, (200, 100))
frame({Button.LEFT_MOUSE}, (260, 100))
frame(set(), (260, 100))

# run one second of wall-clock time
frame({Button.TOGGLE_SIMULATING}, (0, 0), dt=0.0)
for _ in range(60):
    frame(set(), (0, 0))

renderer = BufferedRenderer()
sb.render(renderer)
print(renderer.frames[-1])
