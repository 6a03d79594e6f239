class PluginError(Exception):
    """Base exception for the DynamoDB metrics plugin."""


class SessionError(PluginError):
    """Raised when an authenticated AWS session cannot be established.

    This is the only error that aborts a run before collection starts.
    """


class MetricFetchError(PluginError):
    """Raised when CloudWatch returns a datapoint that cannot be used."""

    def __init__(self, metric_name: str, message: str):
        """Initialize a fetch error for a single metric.

        Args:
            metric_name: The CloudWatch metric being fetched.
            message: What was wrong with the response.
        """
        super().__init__(f"{metric_name}: {message}")
        self.metric_name = metric_name
