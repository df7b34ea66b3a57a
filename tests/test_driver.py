"""Incoming link source and subscription driver."""

import asyncio

import pytest

from bsky_intents import IncomingLinkSource, IntentHandler, LinkParseError, PipelineState, SubscriptionDriver

COMPOSE_LINK = "bluesky://intent/compose?text=hello"


class TestIncomingLinkSource:
    def test_listeners_notified(self):
        source = IncomingLinkSource()
        seen = []
        remove = source.add_listener(seen.append)

        source.set("a")
        source.set(None)
        remove()
        source.set("b")

        assert seen == ["a", None]
        assert source.current == "b"

    def test_remove_twice_is_harmless(self):
        source = IncomingLinkSource()
        remove = source.add_listener(lambda url: None)
        remove()
        remove()


class TestSubscriptionDriver:
    @pytest.mark.asyncio
    async def test_handles_launch_link_on_start(self, recorder):
        source = IncomingLinkSource(COMPOSE_LINK)
        driver = SubscriptionDriver(source, IntentHandler(recorder.capabilities(), delay_s=0))

        driver.start()
        await asyncio.sleep(0.02)

        assert driver.running
        assert driver.last_url == COMPOSE_LINK
        assert len(recorder.opened()) == 1

    @pytest.mark.asyncio
    async def test_once_per_distinct_value(self, recorder):
        states = []
        source = IncomingLinkSource()
        driver = SubscriptionDriver(
            source,
            IntentHandler(recorder.capabilities(), delay_s=0),
            on_state=lambda url, state: states.append(state),
        )
        driver.start()

        source.set(COMPOSE_LINK)
        source.set(COMPOSE_LINK)
        source.set("bluesky://intent/compose?text=again")
        await asyncio.sleep(0.02)

        assert states == [PipelineState.SCHEDULED, PipelineState.SCHEDULED]
        assert [o.text for o in recorder.opened()] == ["hello", "again"]

    @pytest.mark.asyncio
    async def test_same_link_after_reset_runs_again(self, recorder):
        source = IncomingLinkSource()
        driver = SubscriptionDriver(source, IntentHandler(recorder.capabilities(), delay_s=0))
        driver.start()

        source.set(COMPOSE_LINK)
        source.set(None)
        source.set(COMPOSE_LINK)
        await asyncio.sleep(0.02)

        assert len(recorder.opened()) == 2

    def test_empty_values_do_nothing(self, recorder):
        driver = SubscriptionDriver(IncomingLinkSource(), IntentHandler(recorder.capabilities()))
        assert driver.on_link(None) is None
        assert driver.on_link("") is None
        assert recorder.calls == []

    def test_stop_unsubscribes(self, recorder):
        source = IncomingLinkSource()
        driver = SubscriptionDriver(source, IntentHandler(recorder.capabilities()))
        driver.start()
        driver.stop()

        source.set("bluesky://profile/alice")
        assert not driver.running
        assert driver.last_url is None

    def test_parse_error_reaches_emitter(self, recorder):
        source = IncomingLinkSource()
        driver = SubscriptionDriver(source, IntentHandler(recorder.capabilities()))
        driver.start()

        with pytest.raises(LinkParseError):
            source.set("garbage")
        assert driver.last_url == "garbage"
