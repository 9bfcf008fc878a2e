"""
Convenience methods on HelixClient.

Single-call helpers return the decoded payload directly. Stream helpers
return a PageStream over a paginated endpoint; they make no call until the
stream is iterated.

Example usage:
    ```python
    async with HelixClient() as client:
        channel = await client.get_channel_from_login("twitchdev", token)

        async for chatter in client.get_chatters("1234", "4321", token, batch_size=1000):
            print(chatter.user_login)

        # Recurring segments never end, bound the stream
        segments = await client.get_channel_schedule("1234", token).collect(limit=20)
    ```
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Sequence, Type, TypeVar, Union

import pydantic

from ..runtime.errors import CustomError, ValidationError
from .endpoints.channels import (
    AddChannelVipRequest, ChannelInformation, GetChannelInformationRequest, GetVipsRequest, Vip,
    RemoveChannelVipRequest,
)
from .endpoints.chat import (
    AnnouncementColor, ChannelEmote, ChatSettings, Chatter, Emote, GetChannelEmotesRequest,
    GetChatSettingsRequest, GetChattersRequest, GetEmoteSetsRequest, GetGlobalEmotesRequest,
    GetUserChatColorRequest, GlobalEmote, SendChatAnnouncementBody, SendChatAnnouncementRequest,
    UpdateUserChatColorRequest, UserChatColor,
)
from .endpoints.eventsub import (
    CreateEventSubSubscriptionBody, CreateEventSubSubscriptionRequest, EventSubSubscription,
)
from .endpoints.games import MAX_GAME_IDS, Game, GetGamesRequest
from .endpoints.moderation import (
    AddChannelModeratorRequest, BannedUser, BanUser, BanUserBody, BanUserRequest,
    CheckAutoModStatus, CheckAutoModStatusBody, CheckAutoModStatusRequest,
    DeleteChatMessagesRequest, GetBannedUsersRequest, GetModeratorsRequest, Moderator,
    RemoveChannelModeratorRequest, UnbanUserRequest,
)
from .endpoints.raids import CancelARaidRequest, StartARaidRequest, StartARaidResponse
from .endpoints.schedule import (
    CreateChannelStreamScheduleSegmentBody, CreateChannelStreamScheduleSegmentRequest,
    GetChannelStreamScheduleRequest, ScheduledBroadcasts, Segment,
)
from .endpoints.search import Category, Channel, SearchCategoriesRequest, SearchChannelsRequest
from .endpoints.streams import GetFollowedStreamsRequest, Stream
from .endpoints.subscriptions import BroadcasterSubscription, GetBroadcasterSubscriptionsRequest
from .endpoints.users import (
    BlockUserRequest, GetUsersFollowsRequest, GetUsersRequest, UnblockUserRequest, User,
)
from .endpoints.whispers import SendWhisperBody, SendWhisperRequest
from .pagination import PageStream, make_stream
from .request import EmptyBody, NoContent
from .response import Response

if TYPE_CHECKING:
    from ..auth import TwitchToken


logger = logging.getLogger(__name__)

Model = TypeVar("Model", bound=pydantic.BaseModel)


def _build(model: Type[Model], **fields: Any) -> Model:
    """
    Build a request or body model from caller arguments.

    Raises:
        ValidationError: An argument is out of range; no call is made
    """
    try:
        return model(**fields)
    except pydantic.ValidationError as e:
        error = e.errors(include_url=False)[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ValidationError(
            f"invalid {model.__name__}: {field}: {error['msg']}",
            {"field": field, "input": repr(error.get("input"))},
            e,
        ) from e


class HelixClientExt:
    """Convenience wrappers over the typed request methods of HelixClient."""

    # =========================================================================
    # Users and channels
    # =========================================================================

    async def get_user_from_login(self, login: str, token: TwitchToken) -> Optional[User]:
        """Get a user by login, None if no such user exists."""
        return (await self.req_get(GetUsersRequest.logins(login), token)).first()

    async def get_user_from_id(self, user_id: str, token: TwitchToken) -> Optional[User]:
        """Get a user by id, None if no such user exists."""
        return (await self.req_get(GetUsersRequest.ids(user_id), token)).first()

    async def get_channel_from_login(self, login: str,
                                     token: TwitchToken) -> Optional[ChannelInformation]:
        """Get channel information for a login, None if the user does not exist."""
        user = await self.get_user_from_login(login, token)
        if user is None:
            logger.debug(f"No user with login {login}")
            return None
        return await self.get_channel_from_id(user.id, token)

    async def get_channel_from_id(self, broadcaster_id: str,
                                  token: TwitchToken) -> Optional[ChannelInformation]:
        resp = await self.req_get(GetChannelInformationRequest.for_broadcaster(broadcaster_id), token)
        return resp.first()

    async def get_total_followers_from_login(self, login: str, token: TwitchToken) -> Optional[int]:
        """Follower count of a login, None if the user does not exist."""
        user = await self.get_user_from_login(login, token)
        if user is None:
            return None
        return await self.get_total_followers_from_id(user.id, token)

    async def get_total_followers_from_id(self, to_id: str, token: TwitchToken) -> int:
        """
        Follower count of a user id.

        Returns zero if the user does not exist.
        """
        resp = await self.req_get(GetUsersFollowsRequest.followers(to_id), token)
        return resp.data.total

    def get_follow_relationships(self, token: TwitchToken, to_id: Optional[str] = None,
                                 from_id: Optional[str] = None) -> PageStream:
        """
        Stream follow relationships.

        Args:
            token: Token authorizing the calls
            to_id: Only users following this user
            from_id: Only users this user follows
        """
        req = _build(GetUsersFollowsRequest, to_id=to_id, from_id=from_id)
        return make_stream(req, token, self, lambda follows: follows.follow_relationships)

    async def block_user(self, target_user_id: str, token: TwitchToken) -> NoContent:
        return (await self.req_put(BlockUserRequest(target_user_id=target_user_id), EmptyBody(), token)).data

    async def unblock_user(self, target_user_id: str, token: TwitchToken) -> NoContent:
        return (await self.req_delete(UnblockUserRequest(target_user_id=target_user_id), token)).data

    async def get_games_by_id(self, ids: Iterable[str], token: TwitchToken) -> Dict[str, Game]:
        """
        Get games by id, keyed by id.

        Raises:
            CustomError: More than 100 ids; no call is made
        """
        ids = list(ids)
        if len(ids) > MAX_GAME_IDS:
            raise CustomError(f"too many IDs, max {MAX_GAME_IDS}", {"count": len(ids)})
        resp = await self.req_get(GetGamesRequest(id=ids), token)
        return {game.id: game for game in resp.data}

    # =========================================================================
    # Streams, subscriptions and search
    # =========================================================================

    def get_followed_streams(self, token: TwitchToken) -> PageStream[Stream]:
        """
        Stream live channels the token's user follows.

        A token without a user id gives a stream that raises CustomError on
        its first pull.
        """
        if token.user_id is None:
            return PageStream.failing(CustomError("no user_id found on token"))
        return make_stream(GetFollowedStreamsRequest(user_id=token.user_id), token, self)

    def get_broadcaster_subscriptions(self, token: TwitchToken) -> PageStream[BroadcasterSubscription]:
        """Stream subscribers of the token's user, see ``get_followed_streams``."""
        if token.user_id is None:
            return PageStream.failing(CustomError("no user_id found on token"))
        req = GetBroadcasterSubscriptionsRequest(broadcaster_id=token.user_id)
        return make_stream(req, token, self)

    def search_categories(self, query: str, token: TwitchToken) -> PageStream[Category]:
        return make_stream(SearchCategoriesRequest(query=query, first=100), token, self)

    def search_channels(self, query: str, token: TwitchToken,
                        live_only: bool = False) -> PageStream[Channel]:
        """Stream channels matching ``query``, only live ones when ``live_only`` is set."""
        req = SearchChannelsRequest(query=query, live_only=live_only or None)
        return make_stream(req, token, self)

    async def search_channels_page(self, query: str, token: TwitchToken, live_only: bool = False,
                                   first: Optional[int] = None,
                                   after: Optional[str] = None) -> Response:
        """
        Fetch a single page of channel search results.

        The returned Response keeps its cursor; pass it to ``get_next`` or
        back in as ``after`` to continue.
        """
        req = _build(SearchChannelsRequest, query=query, live_only=live_only or None,
                     first=first, after=after)
        return await self.req_get(req, token)

    # =========================================================================
    # Chat
    # =========================================================================

    def get_chatters(self, broadcaster_id: str, moderator_id: str, token: TwitchToken,
                     batch_size: Optional[int] = None) -> PageStream[Chatter]:
        """
        Stream users connected to a broadcaster's chat.

        Args:
            broadcaster_id: Channel to list
            moderator_id: Broadcaster or one of its moderators; must match the token's user
            token: Token with ``moderator:read:chatters``
            batch_size: Page size, at most 1000
        """
        req = _build(GetChattersRequest, broadcaster_id=broadcaster_id, moderator_id=moderator_id,
                     first=batch_size)
        return make_stream(req, token, self)

    async def get_global_emotes(self, token: TwitchToken) -> List[GlobalEmote]:
        return (await self.req_get(GetGlobalEmotesRequest(), token)).data

    async def get_channel_emotes_from_id(self, user_id: str, token: TwitchToken) -> List[ChannelEmote]:
        return (await self.req_get(GetChannelEmotesRequest(broadcaster_id=user_id), token)).data

    async def get_channel_emotes_from_login(self, login: str,
                                            token: TwitchToken) -> Optional[List[ChannelEmote]]:
        """Channel emotes of a login, None if the user does not exist."""
        user = await self.get_user_from_login(login, token)
        if user is None:
            return None
        return await self.get_channel_emotes_from_id(user.id, token)

    async def get_emote_sets(self, emote_set_ids: Iterable[str], token: TwitchToken) -> List[Emote]:
        req = GetEmoteSetsRequest(emote_set_id=list(emote_set_ids))
        return (await self.req_get(req, token)).data

    async def get_chat_settings(self, broadcaster_id: str, token: TwitchToken,
                                moderator_id: Optional[str] = None) -> ChatSettings:
        """
        Chat settings of a broadcaster.

        Pass ``moderator_id`` to also receive the moderator-only settings.
        """
        req = GetChatSettingsRequest(broadcaster_id=broadcaster_id, moderator_id=moderator_id)
        return (await self.req_get(req, token)).data

    async def send_chat_announcement(self, broadcaster_id: str, moderator_id: str, message: str,
                                     color: Union[str, AnnouncementColor],
                                     token: TwitchToken) -> NoContent:
        """
        Send an announcement to a broadcaster's chat.

        Raises:
            ValidationError: ``color`` is not an announcement color, or the
                message is too long; no call is made
        """
        body = _build(SendChatAnnouncementBody, message=str(message), color=color)
        req = SendChatAnnouncementRequest(broadcaster_id=broadcaster_id, moderator_id=moderator_id)
        return (await self.req_post(req, body, token)).data

    async def delete_chat_message(self, broadcaster_id: str, moderator_id: str, message_id: str,
                                  token: TwitchToken) -> NoContent:
        req = DeleteChatMessagesRequest(broadcaster_id=broadcaster_id, moderator_id=moderator_id,
                                        message_id=message_id)
        return (await self.req_delete(req, token)).data

    async def delete_all_chat_message(self, broadcaster_id: str, moderator_id: str,
                                      token: TwitchToken) -> NoContent:
        """Clear every message in a broadcaster's chat room."""
        req = DeleteChatMessagesRequest(broadcaster_id=broadcaster_id, moderator_id=moderator_id)
        return (await self.req_delete(req, token)).data

    async def get_user_chat_color(self, user_id: str, token: TwitchToken) -> Optional[UserChatColor]:
        return (await self.req_get(GetUserChatColorRequest(user_id=[user_id]), token)).first()

    async def get_users_chat_colors(self, user_ids: Iterable[str],
                                    token: TwitchToken) -> List[UserChatColor]:
        req = GetUserChatColorRequest(user_id=list(user_ids))
        return (await self.req_get(req, token)).data

    async def update_user_chat_color(self, user_id: str, color: str, token: TwitchToken) -> NoContent:
        req = _build(UpdateUserChatColorRequest, user_id=user_id, color=color)
        return (await self.req_put(req, EmptyBody(), token)).data

    async def send_whisper(self, from_user_id: str, to_user_id: str, message: str,
                           token: TwitchToken) -> NoContent:
        req = SendWhisperRequest(from_user_id=from_user_id, to_user_id=to_user_id)
        body = _build(SendWhisperBody, message=str(message))
        return (await self.req_post(req, body, token)).data

    # =========================================================================
    # Moderation
    # =========================================================================

    async def ban_user(self, target_user_id: str, reason: str, broadcaster_id: str,
                       moderator_id: str, token: TwitchToken,
                       duration: Optional[int] = None) -> BanUser:
        """
        Ban a user, or time them out for ``duration`` seconds.

        Example:
            ```python
            ban = await client.ban_user("9876", "spam", "1234", "5678", token, duration=600)
            print(ban.end_time)
            ```
        """
        req = BanUserRequest(broadcaster_id=broadcaster_id, moderator_id=moderator_id)
        body = _build(BanUserBody, user_id=target_user_id, reason=str(reason), duration=duration)
        return (await self.req_post(req, body, token)).data

    async def unban_user(self, target_user_id: str, broadcaster_id: str, moderator_id: str,
                         token: TwitchToken) -> NoContent:
        req = UnbanUserRequest(broadcaster_id=broadcaster_id, moderator_id=moderator_id,
                               user_id=target_user_id)
        return (await self.req_delete(req, token)).data

    def get_moderators_in_channel_from_id(self, broadcaster_id: str,
                                          token: TwitchToken) -> PageStream[Moderator]:
        return make_stream(GetModeratorsRequest(broadcaster_id=broadcaster_id), token, self)

    def get_banned_users_in_channel_from_id(self, broadcaster_id: str,
                                            token: TwitchToken) -> PageStream[BannedUser]:
        return make_stream(GetBannedUsersRequest(broadcaster_id=broadcaster_id), token, self)

    async def add_channel_moderator(self, broadcaster_id: str, user_id: str,
                                    token: TwitchToken) -> NoContent:
        req = AddChannelModeratorRequest(broadcaster_id=broadcaster_id, user_id=user_id)
        return (await self.req_post(req, EmptyBody(), token)).data

    async def remove_channel_moderator(self, broadcaster_id: str, user_id: str,
                                       token: TwitchToken) -> NoContent:
        req = RemoveChannelModeratorRequest(broadcaster_id=broadcaster_id, user_id=user_id)
        return (await self.req_delete(req, token)).data

    async def check_automod_status(self, broadcaster_id: str,
                                   messages: Sequence[CheckAutoModStatusBody],
                                   token: TwitchToken) -> List[CheckAutoModStatus]:
        """Check whether messages would pass the channel's AutoMod, in the order given."""
        req = CheckAutoModStatusRequest(broadcaster_id=broadcaster_id)
        return (await self.req_post(req, list(messages), token)).data

    # =========================================================================
    # VIPs, raids, schedule and EventSub
    # =========================================================================

    def get_vips_in_channel(self, broadcaster_id: str, token: TwitchToken) -> PageStream[Vip]:
        return make_stream(GetVipsRequest(broadcaster_id=broadcaster_id), token, self)

    async def add_channel_vip(self, broadcaster_id: str, user_id: str,
                              token: TwitchToken) -> NoContent:
        req = AddChannelVipRequest(broadcaster_id=broadcaster_id, user_id=user_id)
        return (await self.req_post(req, EmptyBody(), token)).data

    async def remove_channel_vip(self, broadcaster_id: str, user_id: str,
                                 token: TwitchToken) -> NoContent:
        req = RemoveChannelVipRequest(broadcaster_id=broadcaster_id, user_id=user_id)
        return (await self.req_delete(req, token)).data

    async def start_a_raid(self, from_broadcaster_id: str, to_broadcaster_id: str,
                           token: TwitchToken) -> StartARaidResponse:
        req = StartARaidRequest(from_broadcaster_id=from_broadcaster_id,
                                to_broadcaster_id=to_broadcaster_id)
        return (await self.req_post(req, EmptyBody(), token)).data

    async def cancel_a_raid(self, broadcaster_id: str, token: TwitchToken) -> NoContent:
        return (await self.req_delete(CancelARaidRequest(broadcaster_id=broadcaster_id), token)).data

    def get_channel_schedule(self, broadcaster_id: str, token: TwitchToken) -> PageStream[Segment]:
        """
        Stream the scheduled broadcasts of a channel.

        Recurring segments repeat forever; limit the stream with
        ``take_while`` or ``collect(limit=...)``.
        """
        req = GetChannelStreamScheduleRequest(broadcaster_id=broadcaster_id)
        return make_stream(req, token, self, _segments)

    async def create_stream_schedule_segment(self, broadcaster_id: str,
                                             segment: CreateChannelStreamScheduleSegmentBody,
                                             token: TwitchToken) -> ScheduledBroadcasts:
        req = CreateChannelStreamScheduleSegmentRequest(broadcaster_id=broadcaster_id)
        return (await self.req_post(req, segment, token)).data

    async def create_eventsub_subscription(self, subscription: CreateEventSubSubscriptionBody,
                                           token: TwitchToken) -> EventSubSubscription:
        return (await self.req_post(CreateEventSubSubscriptionRequest(), subscription, token)).data


def _segments(broadcasts: ScheduledBroadcasts) -> List[Segment]:
    return broadcasts.segments


__all__ = ["HelixClientExt"]
