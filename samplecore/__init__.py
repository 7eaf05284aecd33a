"""Audio building blocks for a sampler: filters, effects, envelopes, buffers, resampling and pitch shifting."""

__version__ = "1.0.0"