from jobboard.content.blog import blog_bp
from jobboard.content.faqs import faqs_bp
from jobboard.content.guides import guides_bp
from jobboard.content.waitlist import waitlist_bp

__all__ = ["blog_bp", "faqs_bp", "guides_bp", "waitlist_bp"]
