"""
This is the main entry point for the student record manager Streamlit application.

This script handles the following key responsibilities:
- Configures diagnostic logging and the Streamlit page.
- Initializes the `StudentDBService`, which bootstraps the record file, the credential
  ledger (with the default administrator) and the activity log folder.
- Manages the session state to track the logged-in user and the authentication flow.
- Routes the user to the authentication pages or the main menu.

Run with: streamlit run main.py
"""
# main.py

import logging

import streamlit as st

from studentdb import config
from studentdb.service import StudentDBService
import gui

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

st.set_page_config(
    page_title="Student Records",
    layout="centered"
)

# Service Initialization
@st.cache_resource
def get_student_service():
    """
    Initializes and returns the main StudentDBService instance.

    Cached with `@st.cache_resource` so the stores are loaded once and shared
    across reruns.

    Returns:
        StudentDBService: The singleton instance of the main application service.
    """
    return StudentDBService()

service = get_student_service()

# Session State Management
if 'current_user' not in st.session_state:
    st.session_state.current_user = None
if 'auth_page' not in st.session_state:
    st.session_state.auth_page = 'welcome'

# Main App Router
if st.session_state.current_user:
    gui.show_main_app(service)
else:
    if st.session_state.auth_page == 'welcome':
        gui.show_welcome_page()
    elif st.session_state.auth_page == 'login':
        gui.show_login_form(service)
    elif st.session_state.auth_page == 'register':
        gui.show_register_form(service)
