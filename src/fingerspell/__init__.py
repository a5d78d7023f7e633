"""
Fingerspell

Fingerspelling letters from MediaPipe hand landmarks.
"""
from .landmarks import LandmarkFrame, InvalidFrame, HAND_CONNECTIONS, TIP_IDS
from .finger_state import Digit, FingerSignature, extract_finger_states, all_signatures
from .gestures import GestureClassifier, GestureRuleTable, DEFAULT_RULES, SENTINEL
from .pipeline import GesturePipeline, GestureResult
from .smoothing import SymbolDebouncer
from .config import Config, load_config, build_pipeline, build_debouncer
from .worker import ClassificationWorker
from .detector import HandDetector, frames_from_result

__all__ = [
    'LandmarkFrame',
    'InvalidFrame',
    'HAND_CONNECTIONS',
    'TIP_IDS',
    'Digit',
    'FingerSignature',
    'extract_finger_states',
    'all_signatures',
    'GestureClassifier',
    'GestureRuleTable',
    'DEFAULT_RULES',
    'SENTINEL',
    'GesturePipeline',
    'GestureResult',
    'SymbolDebouncer',
    'Config',
    'load_config',
    'build_pipeline',
    'build_debouncer',
    'ClassificationWorker',
    'HandDetector',
    'frames_from_result',
]
