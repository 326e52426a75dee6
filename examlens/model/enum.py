import enum


class DeploymentEnvironment(enum.Enum):
    Production = "production"
    Development = "development"
    Staging = "staging"
    Sandbox = "sandbox"
    Test = "test"
    Local = "local"


class MismatchPolicy(enum.Enum):
    """What to do when the evaluator returns a different number of records than questions asked."""

    Ignore = "ignore"
    Truncate = "truncate"
    Reject = "reject"
