"""
core - AWS 리소스 인벤토리 수집 인프라

아키텍처:
    core/
    ├── aws/            # ARN 파싱, 값 정규화, 세션/클라이언트
    ├── region/         # 수집 대상 리전 결정
    ├── naming/         # 식별자 -> 이름 캐시 (실행 단위)
    ├── inventory/      # Resource 모델, 수집기, 레지스트리, 내장 서비스
    ├── parallel/       # 병렬 수집 스케줄러와 결과 병합
    ├── output/         # CSV/JSON/Excel/HTML 출력
    ├── runner.py       # 수집 실행 흐름
    ├── config.py       # 중앙 설정 관리
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.config import get_default_region
    region = get_default_region()  # "ap-northeast-1"

    from core.runner import CollectionOptions, run_collection
    summary = run_collection(CollectionOptions(regions=["ap-northeast-1"]))
"""

from core import aws, config, exceptions, inventory, naming, output, parallel, region

__all__: list[str] = [
    # 서브패키지
    "aws",
    "inventory",
    "naming",
    "output",
    "parallel",
    "region",
    # 모듈
    "config",
    "exceptions",
]
