# samplecore

Audio building blocks for a software sampler. Each block works one sample at a
time, or on a list of samples. They are written in plain Python and need no
third-party library.

## Contents

Filters and effects:

- `samplecore.biquad.BiquadFilter` is a biquad low-pass filter. It has a `cutoff` property (20 to 20000 Hz) and a `resonance` property (Q, 0.1 to 10).
- `samplecore.moog.MoogLadderFilter` is a 4-pole ladder low-pass filter. It has `cutoff`, `resonance` (0 to 4) and `drive` (0 or more). `prepare()` sets the cutoff to 20000 Hz, the resonance to 0 and the drive to 1.0, which is strong saturation. Set `drive = 0.0` after `prepare()` for a clean signal.
- `samplecore.drive.DriveEffect` is a soft saturator. A `drive` of 1.0 passes the signal through. The module also provides `tanh_approx`, a rational tanh approximation that clamps its input to -3..3.
- `samplecore.lofi.LofiEffect` reduces bit depth and sample rate. Its properties are `bit_depth` (1 to 16) and `sample_rate_reduction` (0.01 to 1).

Envelopes:

- `samplecore.envelope_generator.EnvelopeGenerator` is a linear attack/release envelope for modulation. Its state is `EnvelopeState`.
- `samplecore.amp_envelope.AmpEnvelope` is an ADSR envelope whose segments move exponentially. Its stage is reported as `samplecore.amp_envelope.Stage`.
- `samplecore.adsr.AmpEnvelopeADSR` is an ADSR envelope with linear segments. It also tracks the largest step between consecutive values (`max_delta_per_block`, cleared by `reset_max_delta()`). The same module has `find_jump(values, threshold)`, `basic_cycle_values()` and `rapid_retrigger_values()`. These check an envelope run for discontinuities.

Buffers and queues:

- `samplecore.circular_buffer.CircularBuffer` is a circular buffer. When it is full, it overwrites its oldest samples.
- `samplecore.ring_buffer.RingBuffer` is a fixed-capacity FIFO. When it is full, it refuses further samples.
- `samplecore.audio_ring_buffer.AudioRingBuffer` is a multi-channel (planar) FIFO. Its capacity is rounded up by `next_power_of_two`.
- `samplecore.midi_queue.MidiQueue` is a thread-safe FIFO for events that holds up to 63 events. `push()` returns `False` when the queue is full, and `pop()` returns `None` when it is empty.

Pitch and time:

- `samplecore.window.make_hann` builds a symmetric Hann window.
- `samplecore.granular.GranularTimeWarp` shifts pitch by overlap-adding Hann-windowed grains. It keeps the duration the same.
- `samplecore.resampler.Resampler` resamples each block by linear interpolation at its `ratio`. `samplecore.resampler.cubic_interpolate` is a separate Catmull-Rom interpolation helper.
- `samplecore.pitch_shift.PitchShiftTSM` shifts pitch by resampling. Its read head carries over from one block to the next. The module also provides `unwrap_phase`, and the class has a `spectral_flux` helper.

Setting a pitch or time ratio that is not finite, or that is 0.001 or less, raises `samplecore.granular.TimePitchError` (a `ValueError`). This applies to `GranularTimeWarp` and `Resampler`. Valid ratios are clamped to 0.25..4.

## Example

```python
from samplecore.moog import MoogLadderFilter
from samplecore.adsr import AmpEnvelopeADSR

flt = MoogLadderFilter()
flt.prepare(44100.0)
flt.cutoff = 800.0
flt.resonance = 2.0
flt.drive = 0.0

env = AmpEnvelopeADSR()
env.prepare(44100.0)
env.set_params(0.01, 0.1, 0.5, 0.2)
env.note_on(1.0)

tone = [env.process_sample() for _ in range(1024)]
filtered = flt.process_block(tone)
```

## What it does not do

This is a library of processing blocks only. It does not include:

- audio input or output
- loading or decoding sample files
- voice allocation or a complete sampler engine
- MIDI device handling
- a user interface or a command-line program

You wire the blocks together yourself.

## Running the tests

```
pip install .[test]
pytest
```