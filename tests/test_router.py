from __future__ import annotations

import pytest

from branches.suggestions.actions import CastVote, OpenForm, SubmitForm, ViewResults
from branches.suggestions.errors import AuthorizationError, ConfigurationError, ValidationError
from branches.suggestions.router import (
    Acknowledge,
    PrivateReply,
    Requester,
    ShowForm,
    SuggestionRouter,
)
from branches.suggestions.store import VoteDirection, VoteStore
from tests.conftest import STAFF_ROLE_ID, FakeGateway

STAFF = frozenset({STAFF_ROLE_ID})


def _member(user_id: int = 10, **names: str) -> Requester:
    return Requester(user_id=user_id, **names)


def test_request_form_encodes_anonymity(router: SuggestionRouter) -> None:
    form = router.request_form(anonymous=True)
    assert isinstance(form, ShowForm)
    assert form.custom_id == "fb_modal:1"
    assert form.title == "Submit Feedback"
    assert [(f.custom_id, f.label, f.max_length, f.required) for f in form.fields] == [
        ("text", "Your suggestion or feedback", 1024, True),
    ]
    assert router.request_form(anonymous=False).custom_id == "fb_modal:0"


@pytest.mark.asyncio
async def test_submit_posts_then_attaches_controls(router: SuggestionRouter, gateway: FakeGateway) -> None:
    reply = await router.submit_form(False, "  Add a music channel  ", _member(nickname="Nick", username="nick99"))

    assert reply == PrivateReply("Thanks! Your suggestion was submitted.")
    assert len(gateway.posts) == 1
    message_id, post = next(iter(gateway.posts.items()))
    assert post.text == "Add a music channel"
    assert post.footer == "Submitted by Nick"
    assert post.submitted_at.tzinfo is not None

    labels = [c.label for c in gateway.controls[message_id]]
    assert labels == ["👍 0", "👎 0", "View results"]
    assert gateway.controls[message_id][0].action == CastVote(VoteDirection.UP, message_id)


@pytest.mark.asyncio
async def test_submit_anonymously_hides_name(router: SuggestionRouter, gateway: FakeGateway) -> None:
    await router.submit_form(True, "Secret idea", _member(nickname="Nick"))
    post = next(iter(gateway.posts.values()))
    assert post.anonymous
    assert post.footer == "Submitted anonymously"


@pytest.mark.asyncio
async def test_submit_name_precedence(router: SuggestionRouter, gateway: FakeGateway) -> None:
    await router.submit_form(False, "one", _member(display_name="Server Name", global_name="Global", username="user"))
    await router.submit_form(False, "two", _member(global_name="Global", username="user"))
    await router.submit_form(False, "three", _member(username="user"))
    footers = [post.footer for post in gateway.posts.values()]
    assert footers == ["Submitted by Server Name", "Submitted by Global", "Submitted by user"]


@pytest.mark.asyncio
async def test_submit_falls_back_to_gateway_name(router: SuggestionRouter, gateway: FakeGateway) -> None:
    gateway.names[10] = "Fetched"
    await router.submit_form(False, "idea", _member())
    assert next(iter(gateway.posts.values())).footer == "Submitted by Fetched"


@pytest.mark.asyncio
async def test_submit_whitespace_is_rejected(router: SuggestionRouter, gateway: FakeGateway) -> None:
    with pytest.raises(ValidationError):
        await router.submit_form(False, "   ", _member(username="user"))
    assert gateway.posts == {}


@pytest.mark.asyncio
async def test_dispatch_reports_empty_text_privately(router: SuggestionRouter, gateway: FakeGateway) -> None:
    effect = await router.dispatch(SubmitForm(anonymous=False, text=" \n "), _member())
    assert effect == PrivateReply("Please include some text.")
    assert gateway.posts == {}


@pytest.mark.asyncio
async def test_submit_with_broken_channel_reports_config_error(
    router: SuggestionRouter, gateway: FakeGateway
) -> None:
    gateway.fail_post = True
    with pytest.raises(ConfigurationError):
        await router.submit_form(False, "idea", _member(username="user"))

    effect = await router.dispatch(SubmitForm(anonymous=True, text="idea"), _member())
    assert effect == PrivateReply("Config error: target suggestions channel is invalid.")
    assert gateway.edit_calls == []


@pytest.mark.asyncio
async def test_submit_succeeds_when_controls_cannot_be_attached(
    router: SuggestionRouter, gateway: FakeGateway
) -> None:
    gateway.fail_edit = True
    reply = await router.submit_form(False, "idea", _member(username="user"))
    assert reply.text == "Thanks! Your suggestion was submitted."
    assert len(gateway.posts) == 1


@pytest.mark.asyncio
async def test_cast_vote_edits_message_in_place(
    router: SuggestionRouter, store: VoteStore, gateway: FakeGateway
) -> None:
    effect = await router.cast_vote(VoteDirection.UP, 555, 1)
    assert effect == Acknowledge()
    assert gateway.edit_calls == [555]
    assert gateway.controls[555][0].label == "👍 1"

    await router.cast_vote(VoteDirection.UP, 555, 1)
    assert gateway.controls[555][0].label == "👍 0"
    assert store.get_record(555).up_count == 0


@pytest.mark.asyncio
async def test_vote_is_kept_when_edit_fails(
    router: SuggestionRouter, store: VoteStore, gateway: FakeGateway
) -> None:
    gateway.fail_edit = True
    effect = await router.dispatch(CastVote(VoteDirection.DOWN, 555), _member(user_id=3))
    assert effect == Acknowledge()
    assert store.get_record(555).down_voters == frozenset({3})


@pytest.mark.asyncio
async def test_view_results_lists_voters_for_staff(router: SuggestionRouter, gateway: FakeGateway) -> None:
    gateway.names.update({1: "Alice", 2: "Bob", 3: "Carol"})
    await router.cast_vote(VoteDirection.UP, 77, 1)
    await router.cast_vote(VoteDirection.UP, 77, 2)
    await router.cast_vote(VoteDirection.DOWN, 77, 3)

    reply = await router.view_results(77, STAFF)
    assert reply.text == (
        "👍 Upvotes (2):\n"
        "• Alice\n"
        "• Bob\n"
        "\n"
        "👎 Downvotes (1):\n"
        "• Carol"
    )


@pytest.mark.asyncio
async def test_view_results_unknown_names(router: SuggestionRouter, gateway: FakeGateway) -> None:
    gateway.names.update({1: RuntimeError("member left"), 2: None})
    await router.cast_vote(VoteDirection.UP, 77, 1)
    await router.cast_vote(VoteDirection.DOWN, 77, 2)

    reply = await router.view_results(77, STAFF)
    assert "👍 Upvotes (1):\n• Unknown" in reply.text
    assert "👎 Downvotes (1):\n• Unknown" in reply.text


@pytest.mark.asyncio
async def test_view_results_requires_staff_role(router: SuggestionRouter, gateway: FakeGateway) -> None:
    gateway.names[1] = "Alice"
    await router.cast_vote(VoteDirection.UP, 77, 1)

    with pytest.raises(AuthorizationError):
        await router.view_results(77, frozenset({1, 2}))

    effect = await router.dispatch(ViewResults(77), Requester(user_id=5, role_ids=frozenset({1})))
    assert effect == PrivateReply("You are not authorized to view voting results.")
    assert "Alice" not in effect.text


@pytest.mark.asyncio
async def test_view_results_explicit_staff_roles(router: SuggestionRouter) -> None:
    reply = await router.view_results(77, {8}, staff_role_ids=[8, 9])
    assert "• None" in reply.text
    with pytest.raises(AuthorizationError):
        await router.view_results(77, {8}, staff_role_ids=[])


@pytest.mark.asyncio
async def test_dispatch_open_form(router: SuggestionRouter) -> None:
    effect = await router.dispatch(OpenForm(anonymous=True), _member())
    assert isinstance(effect, ShowForm)
    assert effect.custom_id == "fb_modal:1"


@pytest.mark.asyncio
async def test_dispatch_full_voting_flow(router: SuggestionRouter, gateway: FakeGateway) -> None:
    await router.dispatch(SubmitForm(anonymous=False, text="More events"), _member(username="author"))
    message_id = next(iter(gateway.posts))
    gateway.names.update({1: "Alice", 2: "Bob"})

    await router.dispatch(CastVote(VoteDirection.UP, message_id), _member(user_id=1))
    await router.dispatch(CastVote(VoteDirection.DOWN, message_id), _member(user_id=2))
    assert [c.label for c in gateway.controls[message_id][:2]] == ["👍 1", "👎 1"]

    staff = Requester(user_id=9, role_ids=STAFF)
    effect = await router.dispatch(ViewResults(message_id), staff)
    assert "• Alice" in effect.text
    assert "• Bob" in effect.text


def test_configured_messages_override_defaults(store: VoteStore, gateway: FakeGateway) -> None:
    router = SuggestionRouter(store, gateway, [1], messages={"form_title": "Share an idea", "submitted": ""})
    assert router.request_form(False).title == "Share an idea"
    assert router.messages["submitted"] == "Thanks! Your suggestion was submitted."
