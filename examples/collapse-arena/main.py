"""
Collapse Arena — tick-collapse Pygame Demo

A 10x10 rock floor over lava. Every wave all remaining tiles flash, then a
random subset crumbles. A treasure chest appears after wave two; the last
tile standing wins. Run with --headless to play the session in the
terminal instead.
"""
from __future__ import annotations

import argparse
import logging
import sys

import pygame

from tick_collapse import Phase, TileState

from game.setup import COLUMNS, FPS, ROWS, TPS, GameState, build_game

TITLE = "Collapse Arena — tick-collapse"
CELL = 56
MARGIN = 40
HUD_H = 150
WIDTH = COLUMNS * CELL + MARGIN * 2
HEIGHT = ROWS * CELL + MARGIN * 2 + HUD_H

BG_COLOR = (18, 16, 22)
HUD_COLOR = (220, 210, 200)
LAVA_COLOR = (220, 70, 20)
WARNING_COLOR = (250, 220, 90)
TREASURE_COLOR = (255, 200, 40)
STATE_COLORS = {
    TileState.NORMAL: (120, 115, 110),
    TileState.CRACKED: (100, 90, 85),
    TileState.VERGE_OF_CRUMBLING: (80, 65, 60),
    TileState.COLLAPSED: LAVA_COLOR,
}
BLINK_TICKS = 5


def _draw_tiles(screen: pygame.Surface, state: GameState) -> None:
    tick = state.session.engine.clock.tick_number
    blink_on = (tick // BLINK_TICKS) % 2 == 0
    for tile in state.tiles:
        row, col = tile.tile_id
        rect = pygame.Rect(MARGIN + col * CELL, MARGIN + row * CELL, CELL - 2, CELL - 2)
        color = STATE_COLORS[tile.state]
        if tile.warning and blink_on:
            color = WARNING_COLOR
        pygame.draw.rect(screen, color, rect)
        if tile is state.treasure_tile and not tile.collapsed:
            pygame.draw.circle(screen, TREASURE_COLOR, rect.center, CELL // 4)


def _draw_hud(screen: pygame.Surface, font: pygame.font.Font, state: GameState) -> None:
    orch = state.session.orchestrator
    pause_str = "  [PAUSED]" if state.paused else ""
    top = MARGIN * 2 + ROWS * CELL - 20
    lines = [
        f"Wave {orch.current_wave}/4   Time {state.timer.text()}   "
        f"Tiles {len(orch.active_tiles)}   {orch.phase.value}{pause_str}",
        "Space=Pause  R=Reset  Esc=Quit",
        *state.log,
    ]
    for i, line in enumerate(lines):
        surf = font.render(line, True, HUD_COLOR)
        screen.blit(surf, (MARGIN, top + i * 18))


def run_window(seed: int | None) -> None:
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    state = build_game(seed=seed)

    tick_acc = 0.0
    tick_interval = 1.0 / TPS
    running = True

    while running:
        dt = pg_clock.tick(FPS) / 1000.0

        # --- Events ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_SPACE:
                    state.paused = not state.paused
                elif event.key == pygame.K_r:
                    state = build_game(seed=seed)
                    tick_acc = 0.0

        # --- Update (tick accumulator) ---
        if not state.paused and not state.session.orchestrator.finished:
            tick_acc += dt
            while tick_acc >= tick_interval:
                state.session.engine.step()
                tick_acc -= tick_interval

        # --- Draw ---
        screen.fill(BG_COLOR)
        _draw_tiles(screen, state)
        _draw_hud(screen, font, state)
        pygame.display.flip()

    pygame.quit()


def run_headless(seed: int | None, rows: int, columns: int, no_floor: bool) -> int:
    state = build_game(
        rows=rows,
        columns=columns,
        seed=seed,
        floor_delay=None if no_floor else 3,
        tps=1,
        echo=True,
    )
    state.session.run(10_000)
    orch = state.session.orchestrator
    print(f"Seed {state.session.engine.seed}: {orch.phase.value}")
    return 0 if orch.phase is Phase.GAME_OVER else 1


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Collapse Arena — four waves of collapsing floor",
    )
    parser.add_argument("--seed", type=int, default=None, help="RNG seed (random if omitted)")
    parser.add_argument("--headless", action="store_true", help="Run without a window")
    parser.add_argument("--rows", type=int, default=ROWS, help=f"Grid rows (default: {ROWS})")
    parser.add_argument(
        "--columns", type=int, default=COLUMNS, help=f"Grid columns (default: {COLUMNS})",
    )
    parser.add_argument(
        "--no-floor", action="store_true",
        help="Never report a floor, to see the startup timeout (headless only)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.headless:
        sys.exit(run_headless(args.seed, args.rows, args.columns, args.no_floor))
    run_window(args.seed)


if __name__ == "__main__":
    main()
