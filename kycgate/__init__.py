"""KYC onboarding engine: compliance, document review and activation."""

__version__ = "1.0.0"
