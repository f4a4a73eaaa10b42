"""Campus Events package.

Organized by feature modules (events, registrations, attendance, feedback,
reports, ...) with a thin Flask controller layer over service/repository layers.
"""
