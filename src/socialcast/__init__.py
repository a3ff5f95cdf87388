"""SocialCast - multi-platform account linking and publish orchestration."""

__version__ = "0.1.0"
