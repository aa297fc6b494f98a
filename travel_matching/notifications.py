from typing import Dict
import logging

from asgiref.sync import async_to_sync
from channels.exceptions import ChannelFull
from channels.layers import get_channel_layer
from django.utils import timezone

from .records import Match

logger = logging.getLogger(__name__)


def notification_group_name(user_id) -> str:
    return f'notifications_{user_id}'


class MatchNotifier:
    """Pushes match events to the per-user notification groups"""

    def __init__(self, channel_layer=None):
        self.channel_layer = channel_layer or get_channel_layer()

    def match_accepted(self, match: Match):
        """Tell the candidate that the viewer accepted them"""
        self.send_notification(match.candidate_id, 'match_accepted', self._match_data(match))

    def match_connected(self, match: Match):
        data = self._match_data(match)
        self.send_notification(match.viewer_id, 'match_connected', data)
        self.send_notification(match.candidate_id, 'match_connected', data)

    def send_notification(self, user_id, notification_type: str, data: Dict):
        """Send real-time notification to user"""
        if not self.channel_layer:
            return

        notification_data = {
            'type': notification_type,
            'data': data,
            'timestamp': timezone.now().isoformat()
        }

        try:
            async_to_sync(self.channel_layer.group_send)(
                notification_group_name(user_id),
                {
                    'type': 'send_notification',
                    'notification': notification_data
                }
            )
        except ChannelFull:
            logger.warning(f"Notification {notification_type} for user {user_id} dropped: channel full")
        except Exception as e:
            # the transition is already committed
            logger.error(f"Notification {notification_type} for user {user_id} failed: {str(e)}")

    @staticmethod
    def _match_data(match: Match) -> Dict:
        return {
            'match_id': match.id,
            'viewer_id': match.viewer_id,
            'candidate_id': match.candidate_id,
            'score': match.score,
            'status': str(match.status),
        }
