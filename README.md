# touchgroove

Pure-Python building blocks for touch-pad instruments. Each piece is a small
state machine driven by the caller, one clock pulse, audio frame or control
step at a time, so it can run inside any audio loop, simulation or test. The
package has no dependencies outside the standard library.

## Installation

```
pip install touchgroove
```

## What is inside

- `touchgroove.clock.Clock`: a PPQN clock. `configure(sample_rate, buffer_size)`
  sets the block interval, `tick()` advances one audio block and calls
  `on_tick` once per pulse, `set_tempo(norm_value)` maps a 0..1 control onto
  30..220 BPM. Below 40 BPM the clock follows rising edges fed to
  `process(state)` instead, one edge per sixteenth note. `run()`, `stop()`,
  `is_running()` and `tempo()` complete it. `fcomp` is the rounded float
  comparison it uses.
- `touchgroove.trigger.Trigger`: fires on every sixteenth note from clock
  pulses, delaying odd steps by `set_swing(frac_swing)` (0..5 pulses).
- `touchgroove.arp.Arp` and `touchgroove.arp.ArpDirection`: a note arpeggiator
  with `note_on`, `note_off`, `trigger` (one call per pulse), `clear`,
  `has_note` and `set_note_length`. The attributes `direction`, `as_played`
  and `rand_chance` choose pitch or input order, forward or reverse, and a
  chance of picking a random held note. When all slots are full the oldest
  note is dropped. Note numbers outside 0..253 raise `ValueError`.
- `touchgroove.trigarp.TrigArp`: the same ordering logic for plain triggers,
  firing `on_trigger` once per `tick()`.
- `touchgroove.mvalue.MValue`: a stored value that a shared knob only changes
  after it has moved past a small threshold, so one knob can serve several
  targets without jumps.
- `touchgroove.knob.AKnob`: normalises, smooths and quantises raw ADC readings;
  `touchgroove.knob.on_off_on` decodes a three-position switch into 0, 1 or 2.
- `touchgroove.xfade.XFade`: a square-law stereo crossfade.
- `touchgroove.scale.Scale` (three eight-note scales selected by
  `scale_index`) and `touchgroove.scale.TransposingScale` (handpan scales an
  octave down, with `trans_mult` semitone factors and `random` note choice).
- `touchgroove.buffer.RampBuffer` and `touchgroove.buffer.LoopBuffer`: stereo
  record buffers that fade in and out at each end of a take. `read` raises
  `ValueError` while nothing has been recorded.
- `touchgroove.slicer.Generator`, `Slice` and `SliceShape`: enveloped slices
  played from a `RampBuffer`, with start points, speed, reverse and shape.
- `touchgroove.looper.Looper` and `Window`: a looper over a `LoopBuffer` built
  from overlapping crossfade windows, with gate, speed/direction, loop region
  and one-shot, loop or fading release. `fmap_exp` and `slope` are its
  helper curves.

## Example

```python
from touchgroove.arp import Arp
from touchgroove.clock import Clock

played = []
arp = Arp(8, 24, on_note_on=lambda num, vel: played.append(num),
          on_note_off=lambda num: None)
clock = Clock(24, on_tick=arp.trigger)
clock.configure(48000, 4)

arp.note_on(0, 127)
arp.note_on(4, 127)
clock.run()
for _ in range(48000 // 4):
    clock.tick()

print(played[:4])
```

A looper over a recorded buffer:

```python
from touchgroove.buffer import LoopBuffer
from touchgroove.looper import Looper

buffer = LoopBuffer(48000)
buffer.set_recording(True)
for n in range(24000):
    buffer.write(0.5, -0.5)
buffer.set_recording(False)
while buffer.is_recording():
    buffer.write(0.0, 0.0)

looper = Looper(buffer)
looper.set_speed(0.75)      # normal speed, forwards
looper.set_loop(0.0, 1.0)   # whole recorded region
looper.set_release(1.0)     # keep looping after the gate closes
looper.set_gate_open(True)
frames = [looper.process() for _ in range(1000)]
```

## What it does not do

The package holds the building blocks only. It has no euclidean pattern
generator, no reading of touch-pad hardware or pad edge detection, and no
ready-made instrument that wires pads, knobs, clock, arpeggiator and looper
together. It does no audio input or output and no synthesis of sound: callers
feed it frames and control values and route its note events and frames
themselves. There is no command-line program.

## Running the tests

```
pip install -e .[test]
pytest
```