"""Exception types shared across the ingress and worker paths."""


class RelayError(Exception):
    """Base exception for knowledge-relay."""


class ConfigError(RelayError):
    """A required environment value is missing."""


class VerificationError(RelayError):
    """Inbound request failed signature, freshness, or header checks."""


class ParseError(RelayError):
    """Payload could not be decoded into the expected shape."""


class UpstreamError(RelayError):
    """A call to Slack, SQS, or Bedrock failed."""


class RoutingError(RelayError):
    """A queue record arrived from an unexpected source."""
