import dataclasses
import logging
import os
import typing

import yaml


logger = logging.getLogger(__name__)


DEFAULT_OUTPUT = "output.wav"


@dataclasses.dataclass (frozen=True)
class SynthSettings:

	"""
	Fixed parameters of the synthesis engine.
	"""

	sample_rate: int = 44100
	attack_seconds: float = 0.01
	decay_seconds: float = 0.1
	padding_seconds: float = 2.0


	def __post_init__ (self) -> None:

		"""
		Reject settings the engine cannot render with.
		"""

		if self.sample_rate <= 0:
			raise ValueError("sample_rate must be positive")

		if self.attack_seconds < 0 or self.decay_seconds < 0 or self.padding_seconds < 0:
			raise ValueError("attack, decay and padding must not be negative")


	@property
	def attack_samples (self) -> int:

		return int(self.sample_rate * self.attack_seconds)


	@property
	def decay_samples (self) -> int:

		return int(self.sample_rate * self.decay_seconds)


	@property
	def padding_samples (self) -> int:

		return int(self.sample_rate * self.padding_seconds)


	@classmethod
	def from_config (cls, config: typing.Optional[typing.Dict[str, typing.Any]]) -> "SynthSettings":

		"""
		Build settings from the ``synth`` section of a loaded config.

		Missing keys keep their defaults and unknown keys are ignored.
		"""

		section = (config or {}).get("synth") or {}

		if not isinstance(section, dict):
			raise ValueError("The 'synth' config section must be a mapping")

		names = {field.name for field in dataclasses.fields(cls)}
		values = {key: value for key, value in section.items() if key in names}

		return cls(**values)


def load_config (config_path: str) -> typing.Dict[str, typing.Any]:

	"""
	Load configuration from a YAML file.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		config = yaml.safe_load(f)

	if config is None:
		return {}

	if not isinstance(config, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	return config
