"""
End-to-end tests package for the Creator Pipeline stack.

Browser scenarios live in the e2e/ subdirectory and are deselected by default;
run them with ``pytest -m e2e e2e_tests``.
"""
