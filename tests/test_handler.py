"""IntentHandler: the full pipeline end to end."""

import asyncio

import pytest

from bsky_intents import (
    ComposerOpts,
    ImageRef,
    IntentHandler,
    IntentKind,
    IntentRegistry,
    IntentSettings,
    LinkParseError,
    PipelineState,
    RegistryError,
    default_registry,
)

COMPOSE_LINK = "bluesky://intent/compose?text=hello&imageUris=a/b.png|10|10"


class TestRegistry:
    def test_default_has_compose(self):
        registry = default_registry()
        assert IntentKind.COMPOSE in registry
        assert registry.kinds() == [IntentKind.COMPOSE]
        assert len(registry) == 1

    def test_duplicate_rejected(self):
        registry = default_registry()
        with pytest.raises(RegistryError):
            registry.register(IntentKind.COMPOSE, dict, lambda payload, caps: None)

    def test_get_missing(self):
        assert IntentRegistry().get(IntentKind.COMPOSE) is None


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_compose_native(self, recorder):
        handler = IntentHandler(recorder.capabilities(), delay_s=0.02)

        assert handler.handle_url(COMPOSE_LINK) == PipelineState.SCHEDULED
        assert recorder.names() == ["close_all"]

        await asyncio.sleep(0.08)
        assert recorder.names() == ["close_all", "open_composer"]
        (opts,) = recorder.opened()
        assert opts.to_dict() == {
            "text": "hello",
            "imageUris": [{"uri": "a/b.png", "width": 10, "height": 10}],
        }

    @pytest.mark.asyncio
    async def test_compose_web_withholds_images(self, recorder):
        recorder.native = False
        handler = IntentHandler(recorder.capabilities(), delay_s=0)

        handler.handle_url(COMPOSE_LINK)
        await asyncio.sleep(0.02)

        (opts,) = recorder.opened()
        assert opts == ComposerOpts(text="hello")

    @pytest.mark.asyncio
    async def test_remote_image_never_reaches_composer(self, recorder):
        handler = IntentHandler(recorder.capabilities(), delay_s=0)

        handler.handle_url(
            "bluesky://intent/compose?imageUris=https://IHaveYourIpNow.com/image.jpeg|1|1,ok.png|5|5"
        )
        await asyncio.sleep(0.02)

        (opts,) = recorder.opened()
        assert opts.image_uris == [ImageRef(uri="ok.png", width=5, height=5)]
        assert opts.text is None

    @pytest.mark.asyncio
    async def test_no_session(self, recorder):
        recorder.session = False
        handler = IntentHandler(recorder.capabilities(), delay_s=0)

        assert handler.handle_url(COMPOSE_LINK) == PipelineState.DROPPED
        await asyncio.sleep(0.02)
        assert recorder.calls == []

    @pytest.mark.asyncio
    async def test_not_an_intent(self, recorder):
        handler = IntentHandler(recorder.capabilities(), delay_s=0)

        for url in (
            "bluesky://profile/alice.bsky.social",
            "https://bsky.app/profile/alice.bsky.social/post/123",
            "bluesky://intent/follow?handle=alice",
        ):
            assert handler.handle_url(url) == PipelineState.NO_INTENT
        await asyncio.sleep(0.02)
        assert recorder.calls == []

    def test_invalid_link_propagates(self, recorder):
        handler = IntentHandler(recorder.capabilities())
        with pytest.raises(LinkParseError):
            handler.handle_url("not a link")
        assert recorder.calls == []

    @pytest.mark.asyncio
    async def test_custom_registry(self, recorder):
        seen = []
        registry = IntentRegistry()
        registry.register(
            IntentKind.COMPOSE,
            lambda params: params.get("text", "").upper(),
            lambda payload, caps: seen.append(payload),
        )
        handler = IntentHandler(recorder.capabilities(), registry=registry, delay_s=0)

        handler.handle_url("bluesky://intent/compose?text=shout")
        await asyncio.sleep(0.02)
        assert seen == ["SHOUT"]
        assert recorder.opened() == []


class TestFromSettings:
    def test_parse_uses_scheme(self, recorder):
        settings = IntentSettings(scheme="skydev", delay_ms=250)
        handler = IntentHandler.from_settings(recorder.capabilities(), settings)

        assert handler.dispatcher.delay_s == 0.25
        assert handler.parse("skydev://intent/compose?text=x").kind is IntentKind.COMPOSE
        assert handler.parse("bluesky://intent/compose?text=x") is None
