from .frequency_model import FrequencyModel

__all__ = ["FrequencyModel"]
