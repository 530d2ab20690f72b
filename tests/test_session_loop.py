"""
Tests for the post-login action loop
"""
import pytest

from archivist.cli.session import Action, SessionLoop
from archivist.core.models import Session
from archivist.features.login import AuthenticatedSession
from archivist.ui.catalog import PromptKey
from archivist.utils.errors import InputClosedError

from tests.conftest import output_of
from tests.test_helpers import FakeRetrieval


@pytest.fixture
def authenticated(submission, retrieval):
    return AuthenticatedSession(
        session=Session.from_credentials("alice@example.com", "pw"),
        submission=submission,
        retrieval=retrieval,
    )


@pytest.fixture
def loop(reader, authenticated):
    return SessionLoop(reader, authenticated)


class TestActionMenu:
    """Tests for action selection"""

    def test_logout_immediately(self, loop, scripted_input, retrieval, console, catalog):
        scripted_input.extend(["0", ""])

        loop.run()

        assert retrieval.logged_out
        output = output_of(console)
        assert f"{catalog[PromptKey.LOGGING_OUT]}imap.example.com..." in output
        assert catalog[PromptKey.LOGOUT_SUCCEED] in output
        assert scripted_input.prompts[-1] == catalog[PromptKey.EXIT]

    def test_invalid_action_reprompts(self, loop, scripted_input, console):
        scripted_input.extend(["3", "x", "0", ""])
        loop.run()
        assert output_of(console).count("[0, 1, 2]") == 2

    def test_menu_shown_each_round(self, loop, scripted_input, console, catalog):
        scripted_input.extend(["1", "bob@example.com", "s", "b", "", "", "no", "0", ""])
        loop.run()
        assert output_of(console).count("[1] Compose") == 2

    def test_read_action(self, loop, scripted_input):
        scripted_input.extend(["2"])
        assert loop.read_action() is Action.FETCH


class TestActions:
    """Tests for action dispatch and error recovery"""

    def test_compose_and_send(self, loop, scripted_input, submission):
        scripted_input.extend(["1", "bob@example.com", "Hi", "Hello Bob", "", "", "yes", "0", ""])
        loop.run()
        assert len(submission.sent) == 1

    def test_send_failure_is_reported(self, loop, scripted_input, submission, retrieval,
                                      console, catalog):
        submission.fail = True
        scripted_input.extend(["1", "bob@example.com", "Hi", "Hello", "", "", "yes", "0", ""])

        loop.run()

        assert f"{catalog[PromptKey.SEND_FAIL]}Recipient refused" in output_of(console)
        assert retrieval.logged_out

    def test_fetch_and_show(self, loop, scripted_input, console):
        scripted_input.extend(["2", "1", "2", "0", ""])
        loop.run()

        shown = output_of(console).split("message starts")[-1]
        assert "  From: carol@example.com" in shown
        assert "  Hi back" in shown

    def test_decode_failure_is_reported(self, reader, authenticated, scripted_input,
                                        console, catalog):
        authenticated.retrieval = FakeRetrieval({"INBOX": [b"Subject: x\r\n\r\n\xff"]})
        scripted_input.extend(["2", "1", "1", "0", ""])

        SessionLoop(reader, authenticated).run()

        output = output_of(console)
        assert catalog[PromptKey.FETCH_MESSAGE_FAIL] in output
        assert authenticated.retrieval.logged_out

    def test_logout_failure_is_reported(self, loop, scripted_input, retrieval, console, catalog):
        retrieval.logout_error = "unexpected status NO"
        scripted_input.extend(["0", ""])

        loop.run()

        assert f"{catalog[PromptKey.LOGOUT_FAIL]}unexpected status NO" in output_of(console)

    def test_no_wait_for_exit(self, reader, authenticated, scripted_input):
        scripted_input.extend(["0"])
        SessionLoop(reader, authenticated, wait_for_exit=False).run()
        assert len(scripted_input.prompts) == 1

    def test_closed_input_at_exit_prompt(self, loop, scripted_input, retrieval):
        scripted_input.extend(["0"])
        loop.run()
        assert retrieval.logged_out

    def test_closed_input_mid_session(self, loop, scripted_input, retrieval):
        """The retrieval session is still logged out before the error propagates"""
        scripted_input.extend(["1", "bob@example.com"])
        with pytest.raises(InputClosedError):
            loop.run()
        assert retrieval.logged_out

    def test_closed_input_at_menu(self, loop, scripted_input, retrieval, catalog):
        with pytest.raises(InputClosedError):
            loop.run()
        assert retrieval.logged_out
        assert catalog[PromptKey.EXIT] not in scripted_input.prompts

    def test_closed_input_with_failing_logout(self, loop, scripted_input, retrieval,
                                              console, catalog):
        retrieval.logout_error = "connection reset"
        scripted_input.extend(["2"])

        with pytest.raises(InputClosedError):
            loop.run()

        assert f"{catalog[PromptKey.LOGOUT_FAIL]}connection reset" in output_of(console)
