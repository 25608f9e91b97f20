"""
Secret scanner for raw file content.

A fixed, ordered battery of regular-expression detectors. Any match marks the
file as suspicious; the pipeline then excludes it entirely. Nothing is
redacted in place.
"""

import logging
import re
from dataclasses import dataclass

from codepack.core.entropy import DEFAULT_THRESHOLDS, EntropyThresholds, looks_random

logger = logging.getLogger(__name__)

# AWS service names that may precede a secret access key
_AWS_SERVICES = (
    "aws|s3|ses|sns|sqs|dynamodb|rds|redshift|elasticache|glacier|cloudfront|route53|iam|sts|"
    "cloudwatch|cloudformation|elasticbeanstalk|codecommit|codedeploy|codepipeline|ec2|vpc|elb|"
    "autoscaling|cloudtrail|emr|kinesis|lambda|cognito|secretsmanager|ssm|kms|eks|ecs|ecr|"
    "sagemaker|athena|glue|batch|backup|textract|translate|transcribe|rekognition|polly|lex"
)


@dataclass(frozen=True)
class SecretDetector:
    """
    One named detector in the battery.

    Attributes:
        category: Label reported when the detector fires
        pattern: Compiled regular expression
        requires_entropy: If True, capture group 1 must also look random
    """

    category: str
    pattern: re.Pattern
    requires_entropy: bool = False

    def matches(self, content: str, thresholds: EntropyThresholds) -> bool:
        if not self.requires_entropy:
            return self.pattern.search(content) is not None
        return any(looks_random(m.group(1), thresholds) for m in self.pattern.finditer(content))


DEFAULT_DETECTORS: tuple[SecretDetector, ...] = (
    SecretDetector("AWS Access Key ID", re.compile(r"AKIA[0-9A-Z]{16}")),
    SecretDetector(
        "AWS Secret Access Key",
        re.compile(rf"(?i)(?:{_AWS_SERVICES}).{{0,20}}['\"][0-9a-zA-Z/+]{{40}}['\"]"),
    ),
    SecretDetector("Google API Key", re.compile(r"AIza[0-9A-Za-z\-_]{35}")),
    SecretDetector("Slack Token", re.compile(r"xox[baprs]-[0-9a-zA-Z-]{10,48}")),
    SecretDetector(
        "Slack Webhook",
        re.compile(r"https://hooks\.slack\.com/services/T[0-9A-Za-z_]+/B[0-9A-Za-z_]+/[0-9A-Za-z_]+"),
    ),
    SecretDetector(
        "GitHub Token",
        re.compile(r"gh[pousr]_[A-Za-z0-9]{36}|github_pat_[A-Za-z0-9_]{22,255}"),
    ),
    SecretDetector("GitLab Token", re.compile(r"glpat-[0-9A-Za-z\-_]{20}")),
    SecretDetector("Private Key", re.compile(r"-----BEGIN ([A-Z0-9]+ )*PRIVATE KEY( BLOCK)?-----")),
    SecretDetector(
        "Generic Secret",
        re.compile(
            r"(?i)[\w.-]*(?:key|secret|token|password)[\w.-]*['\"]?\s*[:=]\s*['\"]([^'\"\s]{8,})['\"]"
        ),
        requires_entropy=True,
    ),
)


class SecretScanner:
    """
    Runs the detector battery against text.

    Categories are reported in battery order, each at most once.
    """

    def __init__(
        self,
        thresholds: EntropyThresholds = DEFAULT_THRESHOLDS,
        detectors: tuple[SecretDetector, ...] = DEFAULT_DETECTORS,
    ):
        self._thresholds = thresholds
        self._detectors = detectors

    @classmethod
    def from_config(cls, security_config) -> "SecretScanner":
        """Build a scanner using the entropy thresholds of a SecurityConfig."""
        return cls(
            EntropyThresholds(
                min_classes=security_config.entropy_min_classes,
                min_unique_chars=security_config.entropy_min_unique_chars,
            )
        )

    @property
    def categories(self) -> list[str]:
        return [d.category for d in self._detectors]

    def scan(self, content: str) -> list[str]:
        """
        Scan untransformed content.

        Returns:
            Matching category labels, empty if the content looks clean
        """
        return [d.category for d in self._detectors if d.matches(content, self._thresholds)]


_default_scanner = SecretScanner()


def scan_content(content: str) -> list[str]:
    """Scan content with the default detector battery and thresholds."""
    return _default_scanner.scan(content)
