"""
Byte Portal

Content visibility, notification fan-out and calendar rendering
for the Byte student-organization portal.
"""
__version__ = "0.1.0"
