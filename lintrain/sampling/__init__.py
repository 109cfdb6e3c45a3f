from .sampling_policy import DEFAULT_PROBABILITY, SamplingPolicy

__all__ = ["DEFAULT_PROBABILITY", "SamplingPolicy"]
