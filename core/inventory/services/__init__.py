"""
core/inventory/services - 내장 수집기

새 수집기는 AWSCollector를 상속해서 만들고 BUILTIN_COLLECTORS에 추가합니다.
"""

from .cloudfront import CloudFrontCollector
from .dynamodb import DynamoDBCollector
from .ec2 import EC2Collector
from .efs import EFSCollector
from .elb import ELBCollector
from .kms import KMSCollector
from .lambda_ import LambdaCollector
from .rds import RDSCollector
from .s3 import S3Collector
from .secretsmanager import SecretsManagerCollector
from .vpc import VPCCollector

BUILTIN_COLLECTORS = (
    CloudFrontCollector,
    DynamoDBCollector,
    EC2Collector,
    EFSCollector,
    ELBCollector,
    KMSCollector,
    LambdaCollector,
    RDSCollector,
    S3Collector,
    SecretsManagerCollector,
    VPCCollector,
)

__all__ = [
    "BUILTIN_COLLECTORS",
    "CloudFrontCollector",
    "DynamoDBCollector",
    "EC2Collector",
    "EFSCollector",
    "ELBCollector",
    "KMSCollector",
    "LambdaCollector",
    "RDSCollector",
    "S3Collector",
    "SecretsManagerCollector",
    "VPCCollector",
]
