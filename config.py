"""설정 저장소 모듈 — 렌더링 설정을 보관하고 읽기/쓰기 계약을 제공한다."""

import copy
import json
from pathlib import Path

from errors import ConfigKeyError, DuplicateSurfaceError

# 기본 설정 경로
_CONFIG_PATH = Path(__file__).parent / "config.json"

# 기본값 — 생성자 옵션/config.json에 누락된 키가 있을 때 사용
_DEFAULTS = {
    # 텍스트 기본 정렬
    "align": "left",
    # 배경 (색상 이름 | hex | 이미지 URL | None)
    "background": None,
    # 서피스 핸들 — 인스턴스당 한 번만 할당
    "surface": None,
    # 텍스트 기본 색상
    "color": "black",
    # 다운로드 트리거 셀렉터 ("" = 사용 안 함)
    "download": "",
    # 서피스를 붙일 컨테이너 셀렉터
    "el": "#cardmaker",
    "width": 400,
    "height": 250,
    # 카드 템플릿 (background, images, text)
    "template": {},
}


def _deep_merge(base: dict, override: dict) -> dict:
    """base 딕셔너리에 override 값을 병합한다 (깊은 병합)."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Path | None = None) -> dict:
    """설정 파일을 읽어 생성자 옵션 딕셔너리로 반환한다.

    파일이 없으면 기본값을 사용한다.
    """
    config_path = path or _CONFIG_PATH
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            user_config = json.load(f)
        return _deep_merge(copy.deepcopy(_DEFAULTS), user_config)
    return copy.deepcopy(_DEFAULTS)


class ConfigStore:
    """인스턴스 전용 설정 저장소.

    값의 타입은 검사하지 않는다. 잘못된 값의 해석과 도메인 예외는
    값을 사용하는 쪽이 담당한다.
    """

    def __init__(self, initial: dict | None = None):
        self._config = copy.deepcopy(_DEFAULTS)
        if initial:
            self.set(initial)

    def get(self, keys=None):
        """설정 값을 읽는다.

        - None: 전체 설정 딕셔너리 (참조)
        - str: 해당 값. 빈 문자열("")이면 ConfigKeyError
        - list/tuple: {키: 값} 부분 딕셔너리. 없는 키는 None
        """
        if keys is None:
            return self._config
        if isinstance(keys, str):
            value = self._config.get(keys)
            if isinstance(value, str) and value == "":
                raise ConfigKeyError(keys)
            return value
        return {key: self._config.get(key) for key in keys}

    def set(self, key_or_mapping, value=None) -> dict:
        """단일 키/값 또는 {키: 값} 묶음을 병합하고 갱신된 값을 반환한다."""
        if isinstance(key_or_mapping, dict):
            updates = dict(key_or_mapping)
        else:
            updates = {key_or_mapping: value}

        if "surface" in updates and self._config.get("surface") is not None:
            raise DuplicateSurfaceError("서피스가 이미 설정되어 있어 다시 할당할 수 없습니다")

        self._config.update(updates)
        return self.get(list(updates))
