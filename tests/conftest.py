import pathlib
import types
import typing

import numpy
import pytest

import mmlsynth.settings
import mmlsynth.waveforms


SCENARIO_MML = "L8 V100 @(sawtooth)C(10E(20G L4 V200 <D)10F)10A @(square)16B 4A# 2A | O2D"


def _constant (frequency: float, t: typing.Any) -> typing.Any:

	"""Full-scale DC signal, handy for checking envelopes and amplitudes."""

	return numpy.ones(numpy.shape(t))


def _fixed_noise (frequency: float, t: typing.Any) -> typing.Any:

	"""Seeded stand-in for the noise generator."""

	return numpy.random.default_rng(1234).uniform(-1.0, 1.0, size=numpy.shape(t))


@pytest.fixture
def scenario_mml () -> str:

	"""One line exercising every per-channel instruction."""

	return SCENARIO_MML


@pytest.fixture
def generators () -> typing.Mapping[str, mmlsynth.waveforms.Generator]:

	"""Generator registry with a deterministic noise and a constant ``dc`` timbre."""

	table = dict(mmlsynth.waveforms.WAVEFORMS)
	table["noise"] = _fixed_noise
	table["dc"] = _constant

	return types.MappingProxyType(table)


@pytest.fixture
def small_settings () -> mmlsynth.settings.SynthSettings:

	"""Low sample rate so rendering tests stay fast and the arithmetic stays readable."""

	return mmlsynth.settings.SynthSettings(sample_rate=1000, attack_seconds=0.01, decay_seconds=0.1, padding_seconds=2.0)


@pytest.fixture
def mml_file (tmp_path: pathlib.Path) -> pathlib.Path:

	"""A two-channel score on disk."""

	path = tmp_path / "song.mml"
	path.write_text(
		"/* test song */\n"
		"T120\n"
		":melody\n"
		"L8 V150 CDEFG\n"
		":bass\n"
		"O2 L2 C G\n",
		encoding="utf-8"
	)

	return path
