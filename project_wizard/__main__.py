"""Allow ``python -m project_wizard``."""

from project_wizard.wizard import main

main()
