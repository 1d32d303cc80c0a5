import pygame
import pytest

from flappy.constants import SKY_BOTTOM, SKY_TOP
from flappy.data_models import EpisodeState, InputKind
from flappy.flappy_client import make_gradient, translate_event, window_size

BUTTON = pygame.Rect(100, 100, 180, 56)


def key(k) -> pygame.event.Event:
    return pygame.event.Event(pygame.KEYDOWN, key=k)


def click(pos) -> pygame.event.Event:
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=1)


@pytest.mark.parametrize("state, expected", [
    (EpisodeState.IDLE, InputKind.START),
    (EpisodeState.PLAYING, InputKind.ACTIVATE),
    (EpisodeState.GAME_OVER, InputKind.ACTIVATE),
])
def test_space_starts_or_activates(state, expected) -> None:
    assert translate_event(key(pygame.K_SPACE), state, BUTTON) is expected


def test_click_on_start_button_starts() -> None:
    assert translate_event(click((150, 120)), EpisodeState.IDLE, BUTTON) is InputKind.START


def test_click_outside_start_button_does_nothing_while_idle() -> None:
    assert translate_event(click((5, 5)), EpisodeState.IDLE, BUTTON) is None


def test_click_and_touch_activate_while_playing() -> None:
    touch = pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.5, finger_id=0, touch_id=0)
    assert translate_event(click((5, 5)), EpisodeState.PLAYING, BUTTON) is InputKind.ACTIVATE
    assert translate_event(touch, EpisodeState.PLAYING, BUTTON) is InputKind.ACTIVATE
    assert translate_event(touch, EpisodeState.IDLE, BUTTON) is None


def test_other_keys_are_ignored() -> None:
    assert translate_event(key(pygame.K_a), EpisodeState.PLAYING, BUTTON) is None


def test_window_size_caps_at_field_and_fits_small_screens() -> None:
    assert window_size(1920, 1080) == (420, 760)
    assert window_size(300, 500) == (280, 480)


def test_gradient_runs_top_to_bottom() -> None:
    surface = make_gradient(10, 50)
    assert tuple(surface.get_at((0, 0)))[:3] == SKY_TOP
    assert tuple(surface.get_at((0, 49)))[:3] == SKY_BOTTOM
