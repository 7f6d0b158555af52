"""
This module defines the graphical user interface for the student record manager using Streamlit.

It includes functions for rendering the authentication pages (welcome, login, register),
the administrator menu (add, view, search, update, delete, import, export) and the
read-only menu offered to every other user.

The main entry point for the UI is `show_main_app`, which routes the user to the
appropriate menu based on their username.
"""
# gui.py

import datetime

import pandas as pd
import streamlit as st

STUDENT_COLUMNS = ["id", "name", "age", "branch", "cgpa"]


def _students_frame(students):
    """Builds a DataFrame with one row per student, in store order."""
    return pd.DataFrame([s.to_dict() for s in students], columns=STUDENT_COLUMNS)


def _show_students(students, empty_message="No students found."):
    """Displays a list of students as a table, or an info box if there are none."""
    if not students:
        st.info(empty_message)
        return
    st.caption(f"Total students: {len(students)}")
    st.dataframe(_students_frame(students), hide_index=True, use_container_width=True)


def _student_fields(prefix, student=None):
    """Renders the editable student fields inside a form and returns their values."""
    name = st.text_input("Name", value=student.name if student else "", key=f"{prefix}_name")
    age = st.number_input("Age", min_value=0, max_value=150, step=1,
                          value=int(student.age) if student else 18, key=f"{prefix}_age")
    branch = st.text_input("Branch", value=student.branch if student else "", key=f"{prefix}_branch")
    cgpa = st.number_input("CGPA", min_value=0.0, max_value=10.0, step=0.01, format="%.2f",
                           value=float(student.cgpa) if student else 0.0, key=f"{prefix}_cgpa")
    return name, int(age), branch, float(cgpa)


# Page navigation helpers
def set_page_welcome():
    """Sets the session state to display the welcome page."""
    st.session_state.auth_page = 'welcome'

def set_page_login():
    """Sets the session state to display the login page."""
    st.session_state.auth_page = 'login'

def set_page_register():
    """Sets the session state to display the registration page."""
    st.session_state.auth_page = 'register'


# Authentication Pages
def show_welcome_page():
    """Displays the main welcome screen with login and registration options."""
    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.markdown("<h1 style='text-align: center;'>Student Record Management System</h1>", unsafe_allow_html=True)
        st.info("Log in to manage student records, or create an account to browse them.")

        st.button("Login", on_click=set_page_login, use_container_width=True, type="primary")
        st.button("Register", on_click=set_page_register, use_container_width=True)

def show_login_form(service):
    """Displays the login form and handles user authentication.

    Args:
        service: The main application service instance.
    """
    st.button("← Back to Welcome", on_click=set_page_welcome)
    st.markdown("<h2 style='text-align: center;'>Login</h2>", unsafe_allow_html=True)
    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login", use_container_width=True)

        if submitted:
            user = service.login(username, password)
            if user:
                st.session_state.current_user = user
                st.session_state.page = None
                st.session_state.auth_page = 'welcome'
                st.rerun()
            else:
                st.error("Login failed.")

def show_register_form(service):
    """Displays the registration form and handles new account creation.

    Args:
        service: The main application service instance.
    """
    st.button("← Back to Welcome", on_click=set_page_welcome)
    st.markdown("<h2 style='text-align: center;'>Create a New Account</h2>", unsafe_allow_html=True)
    with st.form("register_form"):
        username = st.text_input("Choose a Username")
        password = st.text_input("Choose a Password", type="password")
        submitted = st.form_submit_button("Register", use_container_width=True)

        if submitted:
            result = service.register_user(username, password)
            if result == 'invalid_username':
                st.error("Usernames must not be empty or contain spaces or path separators.")
            elif result == 'invalid_password':
                st.error("Passwords must not be empty.")
            elif result:
                st.success(f"User {username} registered. You can login now.")
            else:
                st.error("User exists. Choose a different name.")


# Main Application UI
ADMIN_MENU = [
    ("Add Student", "add"),
    ("View All", "view_all"),
    ("Search by Name", "search_name"),
    ("Search by ID", "search_id"),
    ("Update Student", "update"),
    ("Delete Student", "delete"),
    ("Import CSV", "import"),
    ("Export CSV", "export"),
    ("My Activity", "activity"),
]

USER_MENU = [
    ("View All Students", "view_all"),
    ("Search by Name", "search_name"),
    ("Search by ID", "search_id"),
    ("My Activity", "activity"),
]


def show_main_app(service):
    """
    The main application router that displays the menu matching the user.

    The default administrator gets the full menu; every other user gets the
    read-only one.

    Args:
        service: The main application service instance.
    """
    user = st.session_state.current_user
    if service.current_user != user:
        service.current_user = user

    if 'page' not in st.session_state:
        st.session_state.page = None

    if service.is_admin:
        title, menu_items = "Admin Menu", ADMIN_MENU
    else:
        title, menu_items = "User Menu", USER_MENU
    allowed_pages = {value for _, value in menu_items}

    if st.session_state.page is None:
        st.markdown(f"## {title} ({user})")
        st.divider()
        for label, value in menu_items:
            if st.button(label, key=f"menu_btn_{value}", use_container_width=True):
                st.session_state.page = value
                if value == "view_all":
                    # Listing counts as one action; the page then redraws from this snapshot.
                    st.session_state.student_snapshot = service.list_students()
                st.rerun()
        st.divider()
        if st.button("Log Out", key="logout_btn", use_container_width=True):
            service.logout()
            st.session_state.current_user = None
            st.session_state.page = None
            st.session_state.auth_page = 'welcome'
            st.rerun()
        return

    if st.session_state.page not in allowed_pages:
        st.session_state.page = None
        st.rerun()

    if st.button("← Back to Main Menu"):
        st.session_state.page = None
        st.session_state.pop("update_target", None)
        st.rerun()

    page = st.session_state.page
    if page == "add":
        _render_add_page(service)
    elif page == "view_all":
        _show_students(st.session_state.get("student_snapshot", []))
    elif page == "search_name":
        _render_search_name_page(service)
    elif page == "search_id":
        _render_search_id_page(service)
    elif page == "update":
        _render_update_page(service)
    elif page == "delete":
        _render_delete_page(service)
    elif page == "import":
        _render_import_page(service)
    elif page == "export":
        _render_export_page(service)
    elif page == "activity":
        _render_activity_page(service)


def _render_add_page(service):
    st.subheader("Add Student")
    with st.form("add_student_form", clear_on_submit=True):
        name, age, branch, cgpa = _student_fields("add")
        if st.form_submit_button("Add Student"):
            student = service.add_student(name, age, branch, cgpa)
            st.success(f"Added student with ID {student.id}")


def _render_search_name_page(service):
    st.subheader("Search by Name")
    with st.form("search_name_form"):
        term = st.text_input("Search term")
        if st.form_submit_button("Search"):
            _show_students(service.search_by_name(term), "No students match that name.")


def _render_search_id_page(service):
    st.subheader("Search by ID")
    with st.form("search_id_form"):
        student_id = st.number_input("Student ID", min_value=1, step=1)
        if st.form_submit_button("Search"):
            student = service.find_student(int(student_id))
            if student:
                _show_students([student])
            else:
                st.warning("Not found.")


def _render_update_page(service):
    """Two steps: pick a record by id, then edit its fields."""
    st.subheader("Update Student")
    with st.form("update_lookup_form"):
        lookup_id = st.number_input("ID to update", min_value=1, step=1)
        if st.form_submit_button("Load"):
            st.session_state.update_target = service.get_student(int(lookup_id))
            if st.session_state.update_target is None:
                st.warning("No student with that ID.")

    target = st.session_state.get("update_target")
    if target is None:
        return
    st.caption("Current record")
    _show_students([target])
    with st.form("update_student_form"):
        name, age, branch, cgpa = _student_fields(f"update_{target.id}", target)
        if st.form_submit_button("Save Changes"):
            ok = service.update_student(target.id, name, age, branch, cgpa)
            st.session_state.update_target = None
            if ok:
                st.success("Updated.")
            else:
                st.error("Update failed.")


def _render_delete_page(service):
    st.subheader("Delete Student")
    with st.form("delete_student_form"):
        student_id = st.number_input("ID to delete", min_value=1, step=1)
        if st.form_submit_button("Delete"):
            if service.delete_student(int(student_id)):
                st.success("Deleted.")
            else:
                st.error("Delete failed.")


def _render_import_page(service):
    st.subheader("Import CSV")
    st.caption('One record per line: id,"name",age,"branch",cgpa. Ids in the file are replaced.')
    with st.form("import_form"):
        path = st.text_input("CSV file path to import")
        if st.form_submit_button("Import"):
            if service.import_students(path):
                st.success("Import successful.")
            else:
                st.error("Import failed.")


def _render_export_page(service):
    st.subheader("Export CSV")
    with st.form("export_form"):
        path = st.text_input("File path to export to")
        if st.form_submit_button("Export"):
            if service.export_students(path):
                st.success(f"Exported to {path}.")
            else:
                st.error("Export failed.")

    st.divider()
    # Spreadsheet-friendly copy with a header row.
    students_df = _students_frame(service.get_all_students())
    st.download_button(
        "Download Students (CSV)", students_df.to_csv(index=False).encode('utf-8'),
        f"students_export_{datetime.date.today()}.csv", "text/csv"
    )


def _render_activity_page(service):
    st.subheader("My Activity")
    entries = service.get_activity()
    if not entries:
        st.info("No activity recorded yet.")
        return
    activity_df = pd.DataFrame([
        {
            "timestamp": e.timestamp.strftime("%Y-%m-%d %H:%M:%S") if e.timestamp else "",
            "message": e.message,
        }
        for e in entries
    ])
    st.dataframe(activity_df, hide_index=True, use_container_width=True)
