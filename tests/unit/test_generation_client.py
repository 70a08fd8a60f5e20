"""Unit tests for GenerationClient and response extraction."""

import asyncio
import base64
from unittest.mock import AsyncMock, Mock

import pytest
from google.genai import types

from stadiumswap.core.errors import GenerationError, NoImageProducedError, UpstreamError
from stadiumswap.core.generation_client import GenerationClient, extract_image_url
from stadiumswap.core.prompt_builder import build_prompt


class ApiError(Exception):
    """Exception carrying a ``message`` attribute like the SDK's APIError."""

    def __init__(self, message):
        super().__init__(f"404 NOT_FOUND. {message}")
        self.message = message


@pytest.fixture
def sdk_client():
    """SDK client mock with an awaitable generate_content."""
    client = Mock()
    client.aio.models.generate_content = AsyncMock()
    return client


@pytest.fixture
def client_factory(sdk_client):
    return Mock(return_value=sdk_client)


@pytest.fixture
def generation_client(test_config, client_factory):
    return GenerationClient(
        test_config,
        api_key_source=lambda: "test-key",
        client_factory=client_factory,
    )


def inline_part(data: bytes, mime_type: str = "image/png") -> types.Part:
    return types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))


class TestRequestShape:
    """Tests for what is sent to the model."""

    def test_contents_image_then_text(self, generation_client, image_payload, fan_config, png_bytes):
        contents = generation_client.build_contents(image_payload, fan_config)

        assert len(contents) == 1
        assert contents[0].role == "user"
        parts = contents[0].parts
        assert len(parts) == 2
        assert parts[0].inline_data.data == png_bytes
        assert parts[0].inline_data.mime_type == "image/png"
        assert parts[1].text == build_prompt(fan_config)

    def test_generation_config(self, generation_client):
        gen_config = generation_client.build_generation_config()

        assert gen_config.image_config.aspect_ratio == "4:3"
        assert gen_config.image_config.image_size == "1K"

    def test_generate_sends_one_request(
        self, generation_client, sdk_client, client_factory, image_payload, fan_config,
        make_response, png_bytes,
    ):
        sdk_client.aio.models.generate_content.return_value = make_response(inline_part(png_bytes))

        asyncio.run(generation_client.generate(image_payload, fan_config))

        client_factory.assert_called_once_with(api_key="test-key")
        sdk_client.aio.models.generate_content.assert_awaited_once()
        kwargs = sdk_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-3-pro-image-preview"
        assert kwargs["contents"][0].parts[1].text == build_prompt(fan_config)
        assert kwargs["config"].image_config.aspect_ratio == "4:3"

    def test_key_read_on_every_call(
        self, test_config, sdk_client, client_factory, image_payload, fan_config,
        make_response, png_bytes,
    ):
        """A key selected between calls is used by the next call."""
        keys = iter(["first-key", "second-key"])
        generation_client = GenerationClient(
            test_config, api_key_source=lambda: next(keys), client_factory=client_factory
        )
        sdk_client.aio.models.generate_content.return_value = make_response(inline_part(png_bytes))

        asyncio.run(generation_client.generate(image_payload, fan_config))
        asyncio.run(generation_client.generate(image_payload, fan_config))

        assert [c.kwargs["api_key"] for c in client_factory.call_args_list] == [
            "first-key",
            "second-key",
        ]

    def test_default_key_source_reads_environment(self, test_config, monkeypatch):
        monkeypatch.setenv(test_config.api_key_env_var, "env-key")
        generation_client = GenerationClient(test_config)
        assert generation_client.api_key_source() == "env-key"


class TestResponseHandling:
    """Tests for turning responses into data URLs or errors."""

    def test_returns_data_url(
        self, generation_client, sdk_client, image_payload, fan_config, make_response,
        png_bytes, png_base64,
    ):
        sdk_client.aio.models.generate_content.return_value = make_response(inline_part(png_bytes))

        result = asyncio.run(generation_client.generate(image_payload, fan_config))

        assert result == f"data:image/png;base64,{png_base64}"

    def test_text_before_image_is_skipped(self, make_response, png_bytes, png_base64):
        response = make_response(types.Part(text="Here you go!"), inline_part(png_bytes))
        assert extract_image_url(response) == f"data:image/png;base64,{png_base64}"

    def test_first_image_wins(self, make_response, png_bytes):
        second = b"second image"
        response = make_response(
            inline_part(png_bytes, "image/png"), inline_part(second, "image/jpeg")
        )

        result = extract_image_url(response)

        assert result.startswith("data:image/png;base64,")
        assert base64.b64encode(second).decode("ascii") not in result

    def test_mime_type_from_response(self, make_response):
        response = make_response(inline_part(b"jpeg bytes", "image/jpeg"))
        assert extract_image_url(response).startswith("data:image/jpeg;base64,")

    def test_only_first_candidate_inspected(self, png_bytes):
        response = types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(role="model", parts=[types.Part(text="no")])
                ),
                types.Candidate(
                    content=types.Content(role="model", parts=[inline_part(png_bytes)])
                ),
            ]
        )
        with pytest.raises(NoImageProducedError):
            extract_image_url(response)

    def test_text_only_response(
        self, generation_client, sdk_client, image_payload, fan_config, make_response
    ):
        sdk_client.aio.models.generate_content.return_value = make_response(
            types.Part(text="I cannot help with that.")
        )

        with pytest.raises(NoImageProducedError, match="No image was generated"):
            asyncio.run(generation_client.generate(image_payload, fan_config))

    def test_no_candidates(self, make_response):
        with pytest.raises(NoImageProducedError):
            extract_image_url(make_response(candidates=False))

    def test_no_parts(self, make_response):
        with pytest.raises(NoImageProducedError):
            extract_image_url(make_response())

    def test_empty_inline_data_skipped(self, make_response):
        response = make_response(types.Part(inline_data=types.Blob(data=b"", mime_type="image/png")))
        with pytest.raises(NoImageProducedError):
            extract_image_url(response)

    def test_string_data_used_as_is(self):
        inline = Mock(data="QUJD", mime_type="image/webp")
        response = Mock(candidates=[Mock(content=Mock(parts=[Mock(inline_data=inline)]))])
        assert extract_image_url(response) == "data:image/webp;base64,QUJD"

    def test_missing_mime_type_defaults_to_png(self):
        inline = Mock(data=b"abc", mime_type=None)
        response = Mock(candidates=[Mock(content=Mock(parts=[Mock(inline_data=inline)]))])
        assert extract_image_url(response).startswith("data:image/png;base64,")


class TestFailures:
    """Tests for upstream failures."""

    def test_api_message_is_kept(self, generation_client, sdk_client, image_payload, fan_config):
        sdk_client.aio.models.generate_content.side_effect = ApiError(
            "Requested entity was not found."
        )

        with pytest.raises(UpstreamError) as exc_info:
            asyncio.run(generation_client.generate(image_payload, fan_config))

        assert str(exc_info.value) == "Requested entity was not found."
        assert isinstance(exc_info.value.__cause__, ApiError)

    def test_plain_exception_message(self, generation_client, sdk_client, image_payload, fan_config):
        sdk_client.aio.models.generate_content.side_effect = RuntimeError("Quota exceeded")

        with pytest.raises(UpstreamError, match="Quota exceeded"):
            asyncio.run(generation_client.generate(image_payload, fan_config))

    def test_empty_message_falls_back(self, generation_client, sdk_client, image_payload, fan_config):
        sdk_client.aio.models.generate_content.side_effect = RuntimeError()

        with pytest.raises(UpstreamError, match="Failed to transform image"):
            asyncio.run(generation_client.generate(image_payload, fan_config))

    def test_client_construction_failure(self, test_config, image_payload, fan_config):
        factory = Mock(side_effect=ValueError("Missing key inputs argument!"))
        generation_client = GenerationClient(
            test_config, api_key_source=lambda: None, client_factory=factory
        )

        with pytest.raises(UpstreamError, match="Missing key"):
            asyncio.run(generation_client.generate(image_payload, fan_config))

    def test_errors_share_base(self):
        assert issubclass(NoImageProducedError, GenerationError)
        assert issubclass(UpstreamError, GenerationError)
