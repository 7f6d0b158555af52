"""
UI tests for the student record manager using Streamlit's AppTest framework.

These tests simulate user interactions with the frontend to verify that the GUI
behaves as expected: navigation buttons, login and registration forms, and the menu
shown to the administrator versus a regular user.
"""
from streamlit.testing.v1 import AppTest


def _log_messages(service, username):
    return [entry.message for entry in service.activity.read(username)]


def test_ui_welcome_page_buttons():
    """
    Clicking 'Login' and 'Register' on the welcome page switches `auth_page`.
    """
    def render():
        import gui as gui_module

        gui_module.show_welcome_page()

    app = AppTest.from_function(render, default_timeout=15)
    app.session_state["auth_page"] = "welcome"
    app.run()
    assert any("Student Record Management System" in md.value for md in app.markdown)

    app.button[0].click().run()
    assert app.session_state["auth_page"] == "login"

    app.session_state["auth_page"] = "welcome"
    app.button[1].click().run()
    assert app.session_state["auth_page"] == "register"


def test_ui_login_failure_message(service):
    """
    A wrong password shows the generic failure message and starts no session.
    """
    def render(svc):
        import gui as gui_module

        gui_module.show_login_form(svc)

    app = AppTest.from_function(render, args=(service,), default_timeout=15)
    app.session_state["auth_page"] = "login"
    app.run()

    app.text_input[0].input("admin")
    app.text_input[1].input("wrong")
    buttons = {btn.label: btn for btn in app.button}
    buttons["Login"].click().run()

    assert any("Login failed." in err.value for err in app.error)
    assert service.current_user is None


def test_ui_login_success_sets_session(service):
    def render(svc):
        import gui as gui_module

        gui_module.show_login_form(svc)

    app = AppTest.from_function(render, args=(service,), default_timeout=15)
    app.session_state["auth_page"] = "login"
    app.run()

    app.text_input[0].input("admin")
    app.text_input[1].input("admin")
    buttons = {btn.label: btn for btn in app.button}
    buttons["Login"].click().run()

    assert app.session_state["current_user"] == "admin"
    assert service.current_user == "admin"


def test_ui_registration_rejects_duplicate(service):
    """
    Registering a taken username shows an error instead of creating an account.
    """
    service.register_user("bob", "pw1")

    def render(svc):
        import gui as gui_module

        gui_module.show_register_form(svc)

    app = AppTest.from_function(render, args=(service,), default_timeout=15)
    app.session_state["auth_page"] = "register"
    app.run()

    app.text_input[0].input("bob")
    app.text_input[1].input("pw2")
    buttons = {btn.label: btn for btn in app.button}
    buttons["Register"].click().run()

    assert any("User exists" in err.value for err in app.error)


def test_ui_admin_menu_render(admin_service):
    """
    The default administrator sees the full menu, including record maintenance.
    """
    def render(svc):
        import gui as gui_module
        import streamlit as st

        st.session_state["current_user"] = "admin"
        gui_module.show_main_app(svc)

    app = AppTest.from_function(render, args=(admin_service,), default_timeout=15)
    app.run()

    assert any("Admin Menu" in md.value for md in app.markdown)
    labels = [btn.label for btn in app.button]
    assert "Add Student" in labels
    assert "Import CSV" in labels


def test_ui_user_menu_is_read_only(service):
    """
    Any other user gets the read-only menu.
    """
    service.register_user("carol", "pw1")
    service.login("carol", "pw1")

    def render(svc):
        import gui as gui_module
        import streamlit as st

        st.session_state["current_user"] = "carol"
        gui_module.show_main_app(svc)

    app = AppTest.from_function(render, args=(service,), default_timeout=15)
    app.run()

    assert any("User Menu" in md.value for md in app.markdown)
    labels = [btn.label for btn in app.button]
    assert "View All Students" in labels
    assert "Add Student" not in labels
    assert "Delete Student" not in labels


def test_ui_view_all_logs_once(admin_service):
    """
    Opening 'View All' records a single activity line however often the page redraws.
    """
    admin_service.add_student("Alice", 20, "CS", 8.5)

    def render(svc):
        import gui as gui_module
        import streamlit as st

        st.session_state["current_user"] = "admin"
        gui_module.show_main_app(svc)

    app = AppTest.from_function(render, args=(admin_service,), default_timeout=15)
    app.run()
    app.button(key="menu_btn_view_all").click().run()
    app.run()

    assert app.session_state["page"] == "view_all"
    assert _log_messages(admin_service, "admin").count("Viewed all students") == 1
