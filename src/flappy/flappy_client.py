#!/usr/bin/env python3
"""
flappy_client.py

pygame rendering and input shell around GameSession.
Maps keyboard/mouse/touch to activate/start, realizes side effects
(sounds, overlays, score text) and draws a snapshot every frame.
"""

import argparse
import logging
import os
import random
from typing import Dict, Optional

import pygame

from .constants import (
    FIELD_WIDTH, FIELD_HEIGHT, WINDOW_MARGIN, RENDER_FPS, SKY_TOP, SKY_MIDDLE,
    SKY_BOTTOM, PIPE_COLOR, ACTOR_COLOR, WHITE
)
from .data_models import EffectKind, EpisodeState, GameConfig, InputKind, RenderSnapshot
from .game_session import GameSession

logger = logging.getLogger(__name__)

SOUND_FILES = {
    "music": "music.mp3",
    "flap": "flap.mp3",
    "crash": "gameover.mp3",
}
ACTOR_IMAGE = "bird.png"


def window_size(desktop_w: int, desktop_h: int):
    """Field size for a desktop: the default size, shrunk to fit with a margin."""
    return (min(desktop_w - WINDOW_MARGIN, FIELD_WIDTH),
            min(desktop_h - WINDOW_MARGIN, FIELD_HEIGHT))


def translate_event(event: pygame.event.Event, state: EpisodeState,
                    start_button: pygame.Rect) -> Optional[InputKind]:
    """Maps one pygame event to the single game input it stands for, if any."""
    if event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
        return InputKind.START if state is EpisodeState.IDLE else InputKind.ACTIVATE

    if event.type == pygame.MOUSEBUTTONDOWN:
        if state is EpisodeState.IDLE:
            return InputKind.START if start_button.collidepoint(event.pos) else None
        return InputKind.ACTIVATE

    if event.type == pygame.FINGERDOWN:
        return None if state is EpisodeState.IDLE else InputKind.ACTIVATE

    return None


def make_gradient(width: int, height: int) -> pygame.Surface:
    """Three-stop vertical gradient, drawn once and blitted every frame."""
    surface = pygame.Surface((width, height))
    for y in range(height):
        t = y / max(height - 1, 1)
        if t < 0.5:
            a, b, k = SKY_TOP, SKY_MIDDLE, t / 0.5
        else:
            a, b, k = SKY_MIDDLE, SKY_BOTTOM, (t - 0.5) / 0.5
        color = tuple(int(a[i] * (1 - k) + b[i] * k) for i in range(3))
        pygame.draw.line(surface, color, (0, y), (width, y))
    return surface


class SoundBoard:
    """Optional audio. Missing files or a missing mixer just mean silence."""

    def __init__(self, asset_dir: Optional[str]):
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.music_path: Optional[str] = None
        if not asset_dir:
            return
        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning("Sound disabled (mixer error): %s", e)
            return

        music = os.path.join(asset_dir, SOUND_FILES["music"])
        if os.path.exists(music):
            self.music_path = music
        for name in ("flap", "crash"):
            path = os.path.join(asset_dir, SOUND_FILES[name])
            try:
                self.sounds[name] = pygame.mixer.Sound(path)
            except (pygame.error, FileNotFoundError) as e:
                logger.warning("Sound %s unavailable: %s", path, e)

    def play(self, name: str):
        sound = self.sounds.get(name)
        if sound:
            sound.stop()
            sound.play()

    def start_music(self):
        if not self.music_path:
            return
        try:
            pygame.mixer.music.load(self.music_path)
            pygame.mixer.music.set_volume(0.5)
            pygame.mixer.music.play(-1)
        except pygame.error as e:
            logger.warning("Music unavailable: %s", e)
            self.music_path = None

    def stop_music(self):
        if self.music_path:
            pygame.mixer.music.stop()


class FlappyClient:
    def __init__(self, asset_dir: Optional[str] = None, seed: Optional[int] = None):
        pygame.init()
        info = pygame.display.Info()
        self.width, self.height = window_size(info.current_w, info.current_h)
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption("Flappy")

        # --- Game Logic ---
        self.session = GameSession(GameConfig.from_field(self.width, self.height),
                                   rng=random.Random(seed))

        # --- Presentation ---
        self.clock = pygame.time.Clock()
        self.background = make_gradient(self.width, self.height)
        self.large_font = pygame.font.Font(None, 48)
        self.font = pygame.font.Font(None, 28)
        self.start_button = pygame.Rect(0, 0, 180, 56)
        self.start_button.center = (self.width // 2, self.height // 2)
        self.sound = SoundBoard(asset_dir)
        self.actor_image = self._load_actor_image(asset_dir)

        # UI flags driven by the session's effects
        self.show_game_over = False
        self.show_restart_prompt = False
        self.score_text = "Score: 0"

    def _load_actor_image(self, asset_dir: Optional[str]) -> Optional[pygame.Surface]:
        if not asset_dir:
            return None
        path = os.path.join(asset_dir, ACTOR_IMAGE)
        try:
            image = pygame.image.load(path).convert_alpha()
        except (pygame.error, FileNotFoundError) as e:
            logger.warning("Actor image unavailable, drawing a box: %s", e)
            return None
        pose = self.session.get_actor_pose()
        return pygame.transform.smoothscale(image, (int(pose.w), int(pose.h)))

    def run(self):
        """The main client execution loop."""
        logger.info("Window %dx%d, %d FPS", self.width, self.height, RENDER_FPS)
        running = True
        while running:
            elapsed_ms = self.clock.tick(RENDER_FPS)

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                else:
                    self._handle_input(event)

            self.session.on_tick(elapsed_ms)
            self._handle_effects()
            self._draw_game(self.session.snapshot())

        self.sound.stop_music()
        pygame.quit()

    def _handle_input(self, event: pygame.event.Event):
        kind = translate_event(event, self.session.get_episode_state(), self.start_button)
        if kind is InputKind.START:
            self.session.on_start()
        elif kind is InputKind.ACTIVATE:
            self.session.on_activate()

    def _handle_effects(self):
        for effect in self.session.drain_effects():
            if effect.kind is EffectKind.RESET:
                self.show_game_over = False
                self.show_restart_prompt = False
            elif effect.kind is EffectKind.START_MUSIC:
                self.sound.start_music()
            elif effect.kind is EffectKind.STOP_MUSIC:
                self.sound.stop_music()
            elif effect.kind is EffectKind.PLAY_FLAP:
                self.sound.play("flap")
            elif effect.kind is EffectKind.PLAY_CRASH:
                self.sound.play("crash")
            elif effect.kind is EffectKind.SCORE_CHANGED:
                self.score_text = f"Score: {effect.score}"
            elif effect.kind is EffectKind.ENTER_GAME_OVER:
                self.show_game_over = True
            elif effect.kind is EffectKind.HIDE_RESTART_PROMPT:
                self.show_restart_prompt = False
            elif effect.kind is EffectKind.RESTART_ALLOWED:
                self.show_restart_prompt = True

    def _draw_game(self, snap: RenderSnapshot):
        """Renders the game state using Pygame."""
        screen = self.screen
        screen.blit(self.background, (0, 0))

        if snap.state is EpisodeState.IDLE:
            self._draw_start_screen()
            pygame.display.flip()
            return

        # Draw Obstacles
        for o in snap.obstacles:
            pygame.draw.rect(screen, PIPE_COLOR, (o.x, 0, o.width, o.top))
            pygame.draw.rect(screen, PIPE_COLOR, (o.x, o.bottom, o.width, self.height - o.bottom))

        # Draw Actor
        a = snap.actor
        if self.actor_image:
            screen.blit(self.actor_image, (a.x, a.y))
        else:
            pygame.draw.rect(screen, ACTOR_COLOR, (a.x, a.y, a.w, a.h), border_radius=12)

        # HUD
        score_surf = self.font.render(self.score_text, True, WHITE)
        screen.blit(score_surf, (10, 10))

        if self.show_game_over:
            self._draw_game_over()

        pygame.display.flip()

    def _draw_start_screen(self):
        title = self.large_font.render("Flappy", True, WHITE)
        self.screen.blit(title, title.get_rect(center=(self.width // 2, self.height // 3)))
        pygame.draw.rect(self.screen, PIPE_COLOR, self.start_button, border_radius=10)
        label = self.font.render("Start", True, WHITE)
        self.screen.blit(label, label.get_rect(center=self.start_button.center))
        hint = self.font.render("Space / Click = Start", True, WHITE)
        self.screen.blit(hint, hint.get_rect(center=(self.width // 2, self.start_button.bottom + 40)))

    def _draw_game_over(self):
        overlay = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 110))
        self.screen.blit(overlay, (0, 0))
        over = self.large_font.render("Game Over", True, WHITE)
        self.screen.blit(over, over.get_rect(center=(self.width // 2, self.height // 2 - 30)))
        if self.show_restart_prompt:
            prompt = self.font.render("Tap to restart", True, WHITE)
            self.screen.blit(prompt, prompt.get_rect(center=(self.width // 2, self.height // 2 + 20)))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Single-screen flap-through-the-gaps arcade game.")
    parser.add_argument("--assets", help="Directory holding bird.png, music.mp3, flap.mp3, gameover.mp3")
    parser.add_argument("--seed", type=int, help="Seed for obstacle gap positions")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    FlappyClient(asset_dir=args.assets, seed=args.seed).run()


if __name__ == "__main__":
    main()
