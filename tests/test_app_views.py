"""
View tests for the Streamlit app.

Runs app.py through streamlit's AppTest with a pre-built in-memory context and
REDIRECT_DELAY=0 so delayed redirects resolve within a single run.
"""

from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from jobportal import router as pages
from jobportal.context import AppContext
from jobportal.ledger import ALREADY_APPLIED
from jobportal.storage import MemoryKeyValueStore

APP_PATH = Path(__file__).resolve().parent.parent / "app.py"


@pytest.fixture
def ctx(monkeypatch):
    monkeypatch.setenv("REDIRECT_DELAY", "0")
    return AppContext(MemoryKeyValueStore())


def _app(ctx, page: str) -> AppTest:
    ctx.router.navigate(page)
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.session_state["ctx"] = ctx
    return at.run()


def _button(at: AppTest, label: str):
    return next(b for b in at.button if b.label == label)


def _card_markdown(at: AppTest) -> list[str]:
    return [m.value for m in at.markdown if 'class="job-card"' in m.value]


class TestAccessDenied:
    def test_guest_on_manage_jobs_is_sent_to_login(self, ctx):
        at = _app(ctx, pages.MANAGE_JOBS)

        assert not at.exception
        assert ctx.router.current == pages.LOGIN
        assert "Access Denied. Please log in as an admin to manage jobs." in [e.value for e in at.error]
        assert at.header[0].value == "Login"

    def test_user_on_admin_page_is_sent_to_login(self, ctx):
        ctx.sessions.login("jane@example.com", "user123")
        at = _app(ctx, pages.VIEW_APPLICATIONS)

        assert ctx.router.current == pages.LOGIN
        assert any("view applications" in e.value for e in at.error)

    def test_admin_on_browse_jobs_is_sent_to_login(self, ctx):
        ctx.sessions.login("admin@jobportal.com", "password123")
        at = _app(ctx, pages.BROWSE_JOBS)

        assert ctx.router.current == pages.LOGIN
        assert "Please log in as a user to browse jobs." in [e.value for e in at.error]

    def test_unknown_page_renders_home(self, ctx):
        at = _app(ctx, "nowhere")

        assert not at.exception
        assert at.title[0].value == "Welcome to Your Dream Job Portal"


class TestLoginRedirect:
    @pytest.mark.parametrize("email, password, landing", [
        ("jane@example.com", "user123", pages.USER_DASHBOARD),
        ("admin@jobportal.com", "password123", pages.ADMIN_DASHBOARD),
    ])
    def test_login_lands_on_dashboard(self, ctx, email, password, landing):
        at = _app(ctx, pages.LOGIN)
        at.text_input(key="login_email").input(email)
        at.text_input(key="login_password").input(password)
        _button(at, "Log In").click().run()

        assert not at.exception
        assert ctx.router.current == landing
        assert "Login successful!" in [s.value for s in at.success]

    def test_bad_password_stays_on_login(self, ctx):
        at = _app(ctx, pages.LOGIN)
        at.text_input(key="login_email").input("jane@example.com")
        at.text_input(key="login_password").input("wrong")
        _button(at, "Log In").click().run()

        assert ctx.router.current == pages.LOGIN
        assert "Invalid email or password." in [e.value for e in at.error]


class TestBrowseJobs:
    def test_apply_then_duplicate(self, ctx):
        ctx.sessions.login("jane@example.com", "user123")
        at = _app(ctx, pages.BROWSE_JOBS)
        first = at.button(key="apply_job1")
        assert first.label == "Apply Now"
        assert not first.disabled

        first.click().run()

        assert 'Successfully applied for "Senior React Developer"!' in [s.value for s in at.success]
        applied = at.button(key="apply_job1")
        assert applied.label == "Applied"
        assert applied.disabled
        assert "badge-applied" in _card_markdown(at)[0]

        # job2 is applied to elsewhere while this page still shows "Apply Now"
        ctx.ledger.apply(ctx.catalog.get("job2"), "jane@example.com", "jane@example.com")
        at.button(key="apply_job2").click().run()

        assert ALREADY_APPLIED in [e.value for e in at.error]
        assert at.button(key="apply_job2").disabled
        assert len(ctx.ledger.list_for_user("jane@example.com")) == 2


class TestJobCardEscaping:
    TITLE = "</div><b>C++ <Senior></b>"

    def _add_job(self, ctx):
        ctx.catalog.add({
            "title": self.TITLE,
            "description": "Tom & Jerry <script>",
            "requirements": "x",
            "location": "Remote",
            "salary": "<100k>",
            "job_type": "Contract",
        })

    def test_manage_jobs_escapes_fields(self, ctx):
        ctx.sessions.login("admin@jobportal.com", "password123")
        self._add_job(ctx)
        at = _app(ctx, pages.MANAGE_JOBS)

        card = next(c for c in _card_markdown(at) if "C++" in c)
        assert "&lt;/div&gt;&lt;b&gt;C++ &lt;Senior&gt;&lt;/b&gt;" in card
        assert "Tom &amp; Jerry &lt;script&gt;" in card
        assert "&lt;100k&gt;" in card
        assert self.TITLE not in card

    def test_browse_jobs_escapes_fields(self, ctx):
        self._add_job(ctx)
        ctx.sessions.login("jane@example.com", "user123")
        at = _app(ctx, pages.BROWSE_JOBS)

        assert all("<b>C++" not in card for card in _card_markdown(at))
