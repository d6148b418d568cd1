"""
Byte Portal Notification Delivery

Mail transport and email templates.
"""
from .base_sender import BaseSender, EmailMessage, SendResult
from .email_sender import EmailSender
from .templates import render_post_email, KIND_MENTION, KIND_DEPARTMENT

__all__ = [
    'BaseSender',
    'EmailMessage',
    'SendResult',
    'EmailSender',
    'render_post_email',
    'KIND_MENTION',
    'KIND_DEPARTMENT',
]
