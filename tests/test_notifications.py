"""Real-time notification tests."""

import logging
from types import SimpleNamespace

import pytest
from channels.exceptions import ChannelFull
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser

from travel_matching.choices import MatchStatus
from travel_matching.consumers import NotificationConsumer
from travel_matching.notifications import MatchNotifier

from .conftest import make_match


class RecordingChannelLayer:

    def __init__(self, fail_with=None):
        self.sent = []
        self.fail_with = fail_with

    async def group_send(self, group, message):
        if self.fail_with:
            raise self.fail_with
        self.sent.append((group, message))


class TestMatchNotifier:

    def test_accept_notifies_candidate(self):
        layer = RecordingChannelLayer()
        match = make_match(viewer_id=1, candidate_id=2, status=MatchStatus.ACCEPTED)

        MatchNotifier(channel_layer=layer).match_accepted(match)

        [(group, message)] = layer.sent
        assert group == 'notifications_2'
        assert message['type'] == 'send_notification'
        assert message['notification']['type'] == 'match_accepted'
        assert message['notification']['data']['match_id'] == match.id
        assert message['notification']['data']['status'] == 'accepted'

    def test_connect_notifies_both_sides(self):
        layer = RecordingChannelLayer()
        match = make_match(viewer_id=1, candidate_id=2, status=MatchStatus.CONNECTED)

        MatchNotifier(channel_layer=layer).match_connected(match)

        assert [group for group, _ in layer.sent] == ['notifications_1', 'notifications_2']

    def test_full_channel_is_logged(self, caplog):
        layer = RecordingChannelLayer(fail_with=ChannelFull())
        match = make_match(viewer_id=1, candidate_id=2)

        with caplog.at_level(logging.WARNING, logger='travel_matching.notifications'):
            MatchNotifier(channel_layer=layer).match_accepted(match)

        assert 'channel full' in caplog.text

    def test_layer_failure_is_logged(self, caplog):
        layer = RecordingChannelLayer(fail_with=ConnectionRefusedError('redis is down'))
        match = make_match(viewer_id=1, candidate_id=2, status=MatchStatus.CONNECTED)

        with caplog.at_level(logging.ERROR, logger='travel_matching.notifications'):
            MatchNotifier(channel_layer=layer).match_connected(match)

        assert caplog.text.count('redis is down') == 2


@pytest.mark.asyncio
class TestNotificationConsumer:

    async def test_anonymous_users_are_rejected(self):
        communicator = WebsocketCommunicator(NotificationConsumer.as_asgi(), '/ws/notifications/')
        communicator.scope['user'] = AnonymousUser()

        connected, code = await communicator.connect()

        assert not connected
        assert code == 4001

    async def test_receives_group_notifications(self):
        communicator = WebsocketCommunicator(NotificationConsumer.as_asgi(), '/ws/notifications/')
        communicator.scope['user'] = SimpleNamespace(id=42, is_anonymous=False)

        connected, _ = await communicator.connect()
        assert connected

        await get_channel_layer().group_send('notifications_42', {
            'type': 'send_notification',
            'notification': {'type': 'match_accepted', 'data': {'score': 57}},
        })
        payload = await communicator.receive_json_from()

        assert payload == {
            'type': 'notification',
            'notification': {'type': 'match_accepted', 'data': {'score': 57}},
        }
        await communicator.disconnect()
