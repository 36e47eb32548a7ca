"""Graphical reminder windows: a single popup and a stack of cards."""

from __future__ import annotations

import os
import sys

from .notifications import (
    AUTO_CLOSE_SECONDS,
    ANIMATION_SPEED,
    MAX_MESSAGE_LEN,
    NOTIFICATION_HEIGHT,
    STACK_SPACING,
    NotificationStack,
)

_BACKGROUND = (45, 45, 55)
_TITLE = (255, 255, 255)
_MESSAGE = (200, 200, 200)
_TIME = (100, 200, 255)
_BUTTON = (70, 130, 180)
_BUTTON_HOVER = (100, 149, 237)
_ACCENT = (255, 165, 0)
_BORDER = (70, 70, 80)
_WHITE = (255, 255, 255)
_COUNTDOWN = (150, 150, 150)

_WRAP_WIDTH = 45
_MAX_LINES = 5
_DRAWN_LINES = 4
_DISPLAY_LIMIT = 75
_DISPLAY_CUT = 72


def wrap_message(message: str) -> list[str]:
    """Split a message into the lines a popup shows."""
    text = message[:MAX_MESSAGE_LEN]
    lines = [line for line in text.split("\n") if line][:_MAX_LINES]
    if len(lines) == 1 and len(lines[0]) > _WRAP_WIDTH:
        lines = [lines[0][:_WRAP_WIDTH], lines[0][_WRAP_WIDTH:]]
    return lines[:_DRAWN_LINES]


def truncate_message(message: str) -> str:
    """Shorten a message to fit on one card line, ending it with '...'."""
    if len(message) > _DISPLAY_LIMIT:
        return message[:_DISPLAY_CUT] + "..."
    return message


def _blend(color, base, alpha: float):
    return tuple(int(b + (c - b) * alpha) for c, b in zip(color, base))


def _font_cache(pygame):
    fonts: dict[int, object] = {}

    def font(size: int):
        if size not in fonts:
            fonts[size] = pygame.font.Font(None, int(size * 1.4))
        return fonts[size]

    return font


def show_visual_notification(title: str, message: str, time_str: str) -> int:
    """Show one reminder window until dismissed or timed out; return 0."""
    import pygame

    width, height = 400, 250
    os.environ["SDL_VIDEO_WINDOW_POS"] = "100,100"
    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Agenda Notification")
        clock = pygame.time.Clock()
        font = _font_cache(pygame)
        button = pygame.Rect(width - 80, height - 40, 70, 30)
        lines = wrap_message(message)
        slide = float(height)
        timer = AUTO_CLOSE_SECONDS

        while True:
            delta = clock.tick(60) / 1000.0
            slide += (0.0 - slide) * ANIMATION_SPEED * delta
            timer -= delta
            if timer <= 0:
                break
            hovering = button.collidepoint(pygame.mouse.get_pos())
            done = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    done = True
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    done = done or button.collidepoint(event.pos)
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    done = True
            if done:
                break

            y = int(slide)
            screen.fill(_BACKGROUND)
            pygame.draw.circle(screen, _ACCENT, (50, 50 - y), 20)
            screen.blit(font(24).render(title, True, _TITLE), (90, 30 - y))
            screen.blit(font(16).render(f"Time: {time_str}", True, _TIME), (90, 60 - y))
            pygame.draw.line(screen, _ACCENT, (20, 90 - y), (width - 20, 90 - y))
            for index, line in enumerate(lines):
                screen.blit(font(18).render(line, True, _MESSAGE), (30, 110 + index * 25 - y))

            pygame.draw.rect(screen, _BUTTON_HOVER if hovering else _BUTTON, button)
            pygame.draw.rect(screen, _WHITE, button, 1)
            label = font(16).render("OK", True, _WHITE)
            screen.blit(label, (button.x + (button.width - label.get_width()) // 2, button.y + 8))

            if timer < 10:
                countdown = font(12).render(f"Auto-close: {timer:.0f}s", True, _COUNTDOWN)
                screen.blit(countdown, (20, height - 20))

            for i in range(3):
                glow = _blend(_ACCENT, _BACKGROUND, (50 - i * 15) / 255)
                pygame.draw.rect(screen, glow, (i, i - y, width - 2 * i, height - 2 * i), 1)

            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


def _dismiss_rect(pygame, width: int, y: float):
    return pygame.Rect(width - 80, int(y + NOTIFICATION_HEIGHT - 35), 70, 25)


def show_stacked_notifications(stack: NotificationStack) -> int:
    """Show the stack of reminder cards until all are gone; return 0."""
    if len(stack) == 0:
        return 0

    import pygame

    width = 420
    height = (NOTIFICATION_HEIGHT + STACK_SPACING) * len(stack) + 20
    pygame.init()
    try:
        sizes = pygame.display.get_desktop_sizes()
        screen_width = sizes[0][0] if sizes else width + 40
        os.environ["SDL_VIDEO_WINDOW_POS"] = f"{screen_width - width - 20},20"
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Agenda Notifications")
        clock = pygame.time.Clock()
        font = _font_cache(pygame)

        while len(stack):
            delta = clock.tick(60) / 1000.0
            stack.update(delta)

            quit_requested = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    quit_requested = True
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    for card in stack:
                        if _dismiss_rect(pygame, width, card.slide_offset).collidepoint(event.pos):
                            stack.remove(card)
                            break
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    stack.clear()
                    quit_requested = True
            if quit_requested:
                break

            screen.fill((0, 0, 0))
            mouse = pygame.mouse.get_pos()
            for card in stack:
                y = card.slide_offset
                top = int(y)
                pygame.draw.rect(screen, _BACKGROUND, (0, top, width, NOTIFICATION_HEIGHT))
                pygame.draw.rect(screen, _BORDER, (0, top, width, NOTIFICATION_HEIGHT), 2)

                pygame.draw.circle(screen, _ACCENT, (30, top + 25), 15)
                pygame.draw.circle(screen, _BACKGROUND, (30, top + 22), 8)
                pygame.draw.rect(screen, _BACKGROUND, (26, top + 22, 8, 6))
                pygame.draw.circle(screen, _WHITE, (30, top + 30), 2)

                screen.blit(font(18).render(card.title, True, _TITLE), (55, top + 10))

                pygame.draw.circle(screen, _TIME, (60, top + 37), 6)
                pygame.draw.line(screen, _WHITE, (60, top + 37), (60, top + 32))
                pygame.draw.line(screen, _WHITE, (60, top + 37), (64, top + 37))
                screen.blit(font(14).render(f"Time: {card.time_str}", True, _TIME), (75, top + 30))

                pygame.draw.line(screen, _ACCENT, (10, top + 50), (width - 10, top + 50))
                text = font(14).render(truncate_message(card.message), True, _MESSAGE)
                screen.blit(text, (10, top + 60))

                bar = int(card.auto_close_timer / AUTO_CLOSE_SECONDS * (width - 20))
                pygame.draw.rect(screen, _ACCENT, (10, top + NOTIFICATION_HEIGHT - 40, bar, 3))

                button = _dismiss_rect(pygame, width, y)
                colour = _BUTTON_HOVER if button.collidepoint(mouse) else _BUTTON
                pygame.draw.rect(screen, colour, button)
                screen.blit(font(14).render("Dismiss", True, _WHITE), (button.x + 8, button.y + 6))

            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


def _three_args(argv: list[str] | None, name: str) -> list[str] | None:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 3:
        print(f"Usage: {name} <title> <message> <time>", file=sys.stderr)
        return None
    return args


def popup_main(argv: list[str] | None = None) -> int:
    """Show a single reminder window from title, message and time arguments."""
    args = _three_args(argv, "algen-notify")
    if args is None:
        return 1
    return show_visual_notification(*args)


def stack_main(argv: list[str] | None = None) -> int:
    """Show a reminder card stack holding the one given notification."""
    args = _three_args(argv, "algen-stack")
    if args is None:
        return 1
    stack = NotificationStack()
    stack.add(*args)
    return show_stacked_notifications(stack)


if __name__ == "__main__":
    sys.exit(stack_main())