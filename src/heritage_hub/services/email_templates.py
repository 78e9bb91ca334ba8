"""HTML email bodies for customer status updates and contact-form inquiries."""

from dataclasses import dataclass
from html import escape
from typing import Any, Callable, Dict, Optional
from urllib.parse import quote

from heritage_hub.config.constants import UPS_TRACKING_URL

SIGNATURE = "<p>— The Heritage Box Team</p>"

BUTTON_STYLE = (
    "display:inline-block;background-color:{color};color:white;padding:12px 24px;"
    "text-decoration:none;border-radius:5px;font-weight:bold;"
)


@dataclass(frozen=True)
class EmailContent:
    subject: str
    html: str


@dataclass(frozen=True)
class StatusEmailContext:
    """Values available to the status email templates."""

    customer_name: str
    order_number: str
    dropbox_link: Optional[str] = None
    tracking_number: Optional[str] = None

    @property
    def tracking_url(self) -> Optional[str]:
        if not self.tracking_number:
            return None
        return UPS_TRACKING_URL.format(tracking_number=quote(self.tracking_number, safe=""))


def _tracking_block(ctx: StatusEmailContext) -> str:
    if not ctx.tracking_number:
        return ""
    style = BUTTON_STYLE.format(color="#351c75")
    return (
        f"<p><strong>Tracking Number:</strong> {escape(ctx.tracking_number)}</p>"
        f'<p><a href="{escape(ctx.tracking_url)}" style="{style}">Track on UPS</a></p>'
    )


def _pending(ctx: StatusEmailContext) -> EmailContent:
    return EmailContent(
        subject=f"Order {ctx.order_number} - We've Received Your Order!",
        html=(
            f"<h2>Thank you for your order, {escape(ctx.customer_name)}!</h2>"
            f"<p>We've received your order <strong>{escape(ctx.order_number)}</strong> "
            "and are preparing your Heritage Box kit.</p>"
            "<p><strong>Next Steps:</strong></p>"
            "<ul>"
            "<li>We'll send you a Heritage Box kit in the mail</li>"
            "<li>When you receive it, fill it with your precious memories</li>"
            "<li>Send it back to us using the prepaid label</li>"
            "</ul>"
            "<p>Questions? Just reply to this email!</p>" + SIGNATURE
        ),
    )


def _kit_sent(ctx: StatusEmailContext) -> EmailContent:
    return EmailContent(
        subject=f"Order {ctx.order_number} - Your Kit is On The Way! 📦",
        html=(
            f"<h2>Great news, {escape(ctx.customer_name)}!</h2>"
            f"<p>Your Heritage Box kit for order <strong>{escape(ctx.order_number)}</strong> "
            "has been shipped!</p>"
            + _tracking_block(ctx)
            + "<p><strong>What to do when it arrives:</strong></p>"
            "<ol>"
            "<li>Carefully pack your photos, videos, and memorabilia</li>"
            "<li>Use the included prepaid shipping label</li>"
            "<li>Send it back to us - we'll handle the rest!</li>"
            "</ol>"
            "<p>We can't wait to digitize your memories!</p>" + SIGNATURE
        ),
    )


def _media_received(ctx: StatusEmailContext) -> EmailContent:
    return EmailContent(
        subject=f"Order {ctx.order_number} - We've Received Your Memories! 📸",
        html=(
            f"<h2>Perfect, {escape(ctx.customer_name)}!</h2>"
            f"<p>We've received your Heritage Box for order "
            f"<strong>{escape(ctx.order_number)}</strong>.</p>"
            "<p>Our team is now carefully cataloging your items and will begin "
            "the digitization process soon.</p>"
            "<p><strong>What happens next:</strong></p>"
            "<ul>"
            "<li>Quality check of all materials</li>"
            "<li>Professional digitization</li>"
            "<li>Quality control review</li>"
            "<li>Safe return of your originals</li>"
            "</ul>"
            "<p>We'll keep you updated throughout the process!</p>" + SIGNATURE
        ),
    )


def _digitizing(ctx: StatusEmailContext) -> EmailContent:
    return EmailContent(
        subject=f"Order {ctx.order_number} - Digitization In Progress 🎬",
        html=(
            f"<h2>Hi {escape(ctx.customer_name)},</h2>"
            "<p>Great news! We're currently digitizing your memories for order "
            f"<strong>{escape(ctx.order_number)}</strong>.</p>"
            "<p>Our specialists are working carefully to preserve every detail "
            "of your precious items.</p>"
            "<p>You'll receive another update once we move to quality check!</p>" + SIGNATURE
        ),
    )


def _quality_check(ctx: StatusEmailContext) -> EmailContent:
    return EmailContent(
        subject=f"Order {ctx.order_number} - Quality Review Underway ✓",
        html=(
            f"<h2>Hi {escape(ctx.customer_name)},</h2>"
            f"<p>Your digitized files for order <strong>{escape(ctx.order_number)}</strong> "
            "are now in quality review.</p>"
            "<p>We're ensuring every photo and video meets our high standards "
            "before delivery.</p>"
            "<p>Almost done!</p>" + SIGNATURE
        ),
    )


def _shipping_back(ctx: StatusEmailContext) -> EmailContent:
    return EmailContent(
        subject=f"Order {ctx.order_number} - Your Originals Are Coming Home! 📦",
        html=(
            f"<h2>Hi {escape(ctx.customer_name)},</h2>"
            "<p>We've carefully packaged your original items and they're heading "
            "back to you!</p>"
            f"<p>Order <strong>{escape(ctx.order_number)}</strong> is on its way.</p>"
            + _tracking_block(ctx)
            + "<p>You'll receive your digital files very soon!</p>" + SIGNATURE
        ),
    )


def _complete(ctx: StatusEmailContext) -> EmailContent:
    link_block = ""
    if ctx.dropbox_link:
        style = BUTTON_STYLE.format(color="#0061ff")
        link_block = (
            "<p><strong>Access your digitized memories here:</strong></p>"
            f'<p><a href="{escape(ctx.dropbox_link)}" style="{style}">View Your Files</a></p>'
        )
    return EmailContent(
        subject=f"Order {ctx.order_number} - Your Digital Memories Are Ready! 🎉",
        html=(
            f"<h2>Congratulations, {escape(ctx.customer_name)}!</h2>"
            f"<p>Your order <strong>{escape(ctx.order_number)}</strong> is complete!</p>"
            + link_block
            + "<p><strong>What you'll find:</strong></p>"
            "<ul>"
            "<li>High-quality scans of all your photos</li>"
            "<li>Digitized videos in modern formats</li>"
            "<li>Organized folders for easy browsing</li>"
            "</ul>"
            "<p>Your original items should arrive back to you soon if they haven't already.</p>"
            "<p>Thank you for trusting us with your precious memories!</p>" + SIGNATURE
        ),
    )


def _canceled(ctx: StatusEmailContext) -> EmailContent:
    return EmailContent(
        subject=f"Order {ctx.order_number} - Order Canceled",
        html=(
            f"<h2>Hi {escape(ctx.customer_name)},</h2>"
            f"<p>Your order <strong>{escape(ctx.order_number)}</strong> has been canceled.</p>"
            "<p>If you have any questions or if this was done in error, please don't "
            "hesitate to reach out.</p>" + SIGNATURE
        ),
    )


# Keyed by "Ops Status Key" (OrderStatus member names)
STATUS_TEMPLATES: Dict[str, Callable[[StatusEmailContext], EmailContent]] = {
    "PENDING": _pending,
    "KIT_SENT": _kit_sent,
    "MEDIA_RECEIVED": _media_received,
    "DIGITIZING": _digitizing,
    "QUALITY_CHECK": _quality_check,
    "SHIPPING_BACK": _shipping_back,
    "COMPLETE": _complete,
    "CANCELED": _canceled,
}


def render_status_email(
    status_key: Optional[str],
    ctx: StatusEmailContext,
) -> Optional[EmailContent]:
    """Render the email for a status key, or None if there is no template."""
    template = STATUS_TEMPLATES.get(status_key or "")
    if template is None:
        return None
    return template(ctx)


def render_contact_form_notification(
    details: Dict[str, Any],
    inquiry_type: Optional[str] = None,
    notes: Optional[str] = None,
    chat_transcript: Optional[str] = None,
) -> EmailContent:
    """
    Internal notification for a contact-form inquiry.

    Args:
        details: Label -> value pairs; empty values are left out of the table
        inquiry_type: Appended to the subject when present
        notes: Customer message
        chat_transcript: Chat widget transcript
    """
    subject_suffix = f" - {inquiry_type}" if inquiry_type else ""
    subject = f"Heritage Box Customer Service{subject_suffix}"

    detail_rows = "".join(
        "<tr>"
        f'<td style="padding:4px 8px; font-weight:bold;">{escape(label)}:</td>'
        f'<td style="padding:4px 8px;">{escape(str(value))}</td>'
        "</tr>"
        for label, value in details.items()
        if value
    )

    message_blocks = ""
    if notes:
        message_blocks += (
            f'<p style="margin:0 0 12px;"><strong>Message:</strong><br/>{escape(str(notes))}</p>'
        )
    if chat_transcript:
        message_blocks += (
            '<p style="margin:0 0 12px;"><strong>Chat Transcript:</strong><br/>'
            f"{escape(str(chat_transcript))}</p>"
        )

    html = (
        "<p>You received a new contact form inquiry.</p>"
        f'<table style="border-collapse:collapse;">{detail_rows}</table>'
        f"{message_blocks or '<p>No message provided.</p>'}"
    )
    return EmailContent(subject=subject, html=html)
