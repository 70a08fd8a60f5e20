"""Unit tests for build_prompt."""

import itertools

import pytest

from stadiumswap.core.models import ATMOSPHERES, INTENSITIES, SPORTS, FanConfig
from stadiumswap.core.prompt_builder import build_prompt


class TestBuildPrompt:
    """Tests for the rendered prompt text."""

    def test_basic_structure(self, fan_config):
        prompt = build_prompt(fan_config)
        lines = prompt.split("\n")

        assert lines[0].startswith("Transform this image into a realistic photo")
        assert lines[1] == ""
        assert lines[2] == "Requirements:"
        assert [line.split(".")[0] for line in lines[3:]] == ["1", "2", "3", "4", "5", "6"]

    def test_values_are_interpolated(self, fan_config):
        prompt = build_prompt(fan_config)

        assert "enthusiastic Basketball fans" in prompt
        assert "Purple and Gold sports jerseys" in prompt
        assert "High intensity level" in prompt
        assert "during a Electric Night Game" in prompt

    @pytest.mark.parametrize(
        "sport,atmosphere,intensity",
        list(itertools.product(SPORTS, ATMOSPHERES, INTENSITIES)),
    )
    def test_each_value_appears_once(self, sport, atmosphere, intensity):
        """Every catalog combination mentions each field exactly once."""
        fan_config = FanConfig(
            sport=sport,
            team_colors="Purple and Gold",
            atmosphere=atmosphere,
            intensity=intensity,
        )
        prompt = build_prompt(fan_config)

        assert prompt.count(sport) == 1
        assert prompt.count("Purple and Gold") == 1
        assert prompt.count(atmosphere) == 1
        assert prompt.count(intensity) == 1

    def test_fixed_directives(self, fan_config):
        prompt = build_prompt(fan_config)

        assert "Maintain the identity, facial features, and pose" in prompt
        assert "stadium floodlights or sunlight" in prompt
        assert "Photorealistic style" in prompt

    def test_deterministic(self, fan_config):
        assert build_prompt(fan_config) == build_prompt(fan_config)

    def test_colors_used_verbatim(self):
        prompt = build_prompt(FanConfig(team_colors="'Chicago Bulls'"))
        assert "with 'Chicago Bulls' sports jerseys" in prompt
