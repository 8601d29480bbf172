import os
import sys

import pygame

from merge2048.best_score import BestScoreStore
from merge2048.game import Game2048, OVER, WON
from merge2048.settings import (
    DEFAULT_SETTINGS,
    MAX_GRID_SIZE,
    MAX_INITIAL_TILES,
    MIN_GRID_SIZE,
    MIN_INITIAL_TILES,
    PROBABILITY_STEP,
)


COLORS = {
    'background': (250, 248, 239),
    'grid_background': (187, 173, 160),
    'empty_cell': (205, 193, 180),
    'text_dark': (119, 110, 101),
    'text_light': (249, 246, 242),
    'button': (143, 122, 102),
    'button_disabled': (205, 193, 180),
    'overlay': (238, 228, 218, 200),
    'panel': (255, 255, 255),
    'highlight': (237, 194, 46),
    'game_over': (200, 0, 0),
    # tile colors
    2: (238, 228, 218),
    4: (237, 224, 200),
    8: (242, 177, 121),
    16: (245, 149, 99),
    32: (246, 124, 95),
    64: (246, 94, 59),
    128: (237, 207, 114),
    256: (237, 204, 97),
    512: (237, 200, 80),
    1024: (237, 197, 63),
    2048: (237, 194, 46),
    'super': (60, 58, 50),
}

KEY_TO_DIRECTION = {
    pygame.K_UP: 'up',
    pygame.K_DOWN: 'down',
    pygame.K_LEFT: 'left',
    pygame.K_RIGHT: 'right',
}

ARROW_LABELS = {
    'up': '^',
    'down': 'v',
    'left': '<',
    'right': '>',
}

SETTING_ROWS = ('grid_size', 'initial_tile_count', 'probability_of_two')


def get_tile_color(value):
    """background color for a tile value"""
    if value in COLORS:
        return COLORS[value]
    elif value > 2048:
        return COLORS['super']
    else:
        return COLORS['empty_cell']


def get_text_color(value):
    """text color for a tile value"""
    if value <= 4:
        return COLORS['text_dark']
    else:
        return COLORS['text_light']


def adjust_setting(settings, name, step):
    """
    move one setting a step up or down, clamped to its range

    returns a new GameSettings, the input is left alone
    """
    if name == 'grid_size':
        value = min(max(settings.grid_size + step, MIN_GRID_SIZE), MAX_GRID_SIZE)
    elif name == 'initial_tile_count':
        value = min(max(settings.initial_tile_count + step, MIN_INITIAL_TILES), MAX_INITIAL_TILES)
    elif name == 'probability_of_two':
        percent = round(settings.probability_of_two * 100) + step * round(PROBABILITY_STEP * 100)
        value = min(max(percent, 0), 100) / 100
    else:
        raise ValueError(f"Unknown setting: {name}")
    return settings.copy(**{name: value})


def describe_setting(settings, name):
    if name == 'grid_size':
        return "Grid Size", f"{settings.grid_size}x{settings.grid_size}"
    if name == 'initial_tile_count':
        return "Starting Tiles", str(settings.initial_tile_count)
    two = round(settings.probability_of_two * 100)
    return "Tile Distribution", f"2: {two}% | 4: {100 - two}%"


class GameGUI:
    def __init__(self, settings=None, best_score_path=None):
        """initialize game GUI"""
        pygame.init()

        self.game = Game2048(settings=settings, best_score_store=BestScoreStore(best_score_path))

        # settings panel edits a copy until applied
        self.temp_settings = self.game.settings.copy()
        self.settings_open = False
        self.selected_setting = 0

        # GUI settings
        self.board_size = 450
        self.cell_margin = 10
        self.header_height = 150
        self.controls_height = 130

        self.window_width = self.board_size
        self.window_height = self.header_height + self.board_size + self.controls_height

        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("2048")

        # fonts
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 24)

        self.clock = pygame.time.Clock()

        self.arrow_buttons = self._layout_arrow_buttons()

    @property
    def cell_size(self):
        n = self.game.size
        return (self.board_size - (n + 1) * self.cell_margin) // n

    def _layout_arrow_buttons(self):
        size = 50
        gap = 8
        center_x = self.window_width // 2
        top = self.header_height + self.board_size + 10
        return {
            'up': pygame.Rect(center_x - size // 2, top, size, size),
            'left': pygame.Rect(center_x - size // 2 - size - gap, top + size + gap, size, size),
            'down': pygame.Rect(center_x - size // 2, top + size + gap, size, size),
            'right': pygame.Rect(center_x + size // 2 + gap, top + size + gap, size, size),
        }

    def draw(self):
        self.screen.fill(COLORS['background'])

        self.draw_header()
        self.draw_board()
        self.draw_arrow_buttons()

        phase = self.game.phase
        if phase == WON:
            self.draw_win_message()
        elif phase == OVER:
            self.draw_game_over_message()

        if self.settings_open:
            self.draw_settings_panel()

    def draw_header(self):
        """title, stats and key help"""
        title = self.font_large.render("2048", True, COLORS['text_dark'])
        self.screen.blit(title, (20, 15))

        stats = f"Score: {self.game.score}   Moves: {self.game.moves}   Best: {self.game.best_score}"
        stats_surface = self.font_small.render(stats, True, COLORS['text_dark'])
        self.screen.blit(stats_surface, (20, 65))

        if self.game.game_over:
            instruction_text = "Game Over! Press N for a new game"
            color = COLORS['game_over']
        else:
            instruction_text = "Use arrow keys or buttons to play"
            color = COLORS['text_dark']
        instruction_surface = self.font_small.render(instruction_text, True, color)
        self.screen.blit(instruction_surface, (20, 95))

        help_text = self.font_small.render("N: new game   S: settings   ESC: quit", True, COLORS['text_dark'])
        self.screen.blit(help_text, (20, 120))

    def draw_board(self):
        grid_rect = pygame.Rect(0, self.header_height, self.board_size, self.board_size)
        pygame.draw.rect(self.screen, COLORS['grid_background'], grid_rect)

        for row in range(self.game.size):
            for col in range(self.game.size):
                self.draw_cell(row, col)

    def draw_cell(self, row, col):
        """draw a single cell of the grid"""
        value = self.game.board[row][col]
        cell_size = self.cell_size

        x = col * (cell_size + self.cell_margin) + self.cell_margin
        y = row * (cell_size + self.cell_margin) + self.cell_margin + self.header_height

        cell_rect = pygame.Rect(x, y, cell_size, cell_size)
        pygame.draw.rect(self.screen, get_tile_color(value), cell_rect, border_radius=6)

        if value != 0:
            # smaller font for longer numbers and smaller cells
            if value < 100 and cell_size >= 70:
                font = self.font_large
            elif value < 1000 and cell_size >= 50:
                font = self.font_medium
            else:
                font = self.font_small

            text_surface = font.render(str(value), True, get_text_color(value))
            text_rect = text_surface.get_rect(center=cell_rect.center)
            self.screen.blit(text_surface, text_rect)

    def draw_arrow_buttons(self):
        disabled = self.game.game_over
        color = COLORS['button_disabled'] if disabled else COLORS['button']
        for direction, rect in self.arrow_buttons.items():
            pygame.draw.rect(self.screen, color, rect, border_radius=6)
            label = self.font_medium.render(ARROW_LABELS[direction], True, COLORS['text_light'])
            self.screen.blit(label, label.get_rect(center=rect.center))

    def _draw_overlay(self, lines):
        overlay = pygame.Surface((self.board_size, self.board_size), pygame.SRCALPHA)
        overlay.fill(COLORS['overlay'])
        self.screen.blit(overlay, (0, self.header_height))

        y = self.header_height + self.board_size // 2 - 20 * len(lines)
        for text, font, color in lines:
            surface = font.render(text, True, color)
            self.screen.blit(surface, surface.get_rect(center=(self.window_width // 2, y)))
            y += 40

    def draw_win_message(self):
        self._draw_overlay([
            ("You Win!", self.font_large, COLORS['text_dark']),
            (f"You reached {self.game.settings.win_value}!", self.font_medium, COLORS['text_dark']),
            ("C: continue playing   N: new game", self.font_small, COLORS['text_dark']),
        ])

    def draw_game_over_message(self):
        lines = [
            ("Game Over", self.font_large, COLORS['game_over']),
            ("No more moves available!", self.font_small, COLORS['text_dark']),
            (f"Final Score: {self.game.score:,}", self.font_medium, COLORS['text_dark']),
            (f"Total Moves: {self.game.moves}", self.font_medium, COLORS['text_dark']),
        ]
        if self.game.score > 0 and self.game.score == self.game.best_score:
            lines.append(("New Best Score!", self.font_medium, COLORS['highlight']))
        lines.append(("N: try again", self.font_small, COLORS['text_dark']))
        self._draw_overlay(lines)

    def draw_settings_panel(self):
        panel = pygame.Rect(20, self.header_height + 20, self.window_width - 40, self.board_size - 40)
        pygame.draw.rect(self.screen, COLORS['panel'], panel, border_radius=10)

        title = self.font_medium.render("Game Settings", True, COLORS['text_dark'])
        self.screen.blit(title, (panel.x + 20, panel.y + 20))

        y = panel.y + 80
        for i, name in enumerate(SETTING_ROWS):
            label, value = describe_setting(self.temp_settings, name)
            color = COLORS['highlight'] if i == self.selected_setting else COLORS['text_dark']
            label_surface = self.font_small.render(f"{label}: {value}", True, color)
            self.screen.blit(label_surface, (panel.x + 20, y))
            y += 45

        help_lines = [
            "UP/DOWN: select   LEFT/RIGHT: change",
            "ENTER: apply   D: defaults   S: close",
        ]
        for line in help_lines:
            surface = self.font_small.render(line, True, COLORS['text_dark'])
            self.screen.blit(surface, (panel.x + 20, y + 20))
            y += 28

    def open_settings(self):
        # always start editing from the settings in use
        self.temp_settings = self.game.settings.copy()
        self.selected_setting = 0
        self.settings_open = True

    def apply_settings(self):
        self.game.apply_settings(self.temp_settings)
        self.settings_open = False

    def new_game(self):
        self.game.new_game()
        print("Game restarted!")

    def handle_settings_key(self, key):
        if key in (pygame.K_s, pygame.K_ESCAPE):
            self.settings_open = False
        elif key == pygame.K_UP:
            self.selected_setting = (self.selected_setting - 1) % len(SETTING_ROWS)
        elif key == pygame.K_DOWN:
            self.selected_setting = (self.selected_setting + 1) % len(SETTING_ROWS)
        elif key in (pygame.K_LEFT, pygame.K_RIGHT):
            step = 1 if key == pygame.K_RIGHT else -1
            name = SETTING_ROWS[self.selected_setting]
            self.temp_settings = adjust_setting(self.temp_settings, name, step)
        elif key == pygame.K_d:
            self.temp_settings = DEFAULT_SETTINGS.copy()
        elif key == pygame.K_RETURN:
            self.apply_settings()
        return True

    def handle_keypress(self, key):
        """keyboard input"""
        if self.settings_open:
            return self.handle_settings_key(key)

        if key == pygame.K_ESCAPE:
            return False  # quit

        elif key == pygame.K_n:
            self.new_game()

        elif key == pygame.K_s:
            self.open_settings()

        elif key == pygame.K_c and self.game.phase == WON:
            self.game.continue_game()

        elif key in KEY_TO_DIRECTION and self.game.phase != OVER:
            self.game.make_move(KEY_TO_DIRECTION[key])

        return True  # continue

    def handle_click(self, pos):
        if self.settings_open or self.game.phase in (WON, OVER):
            return
        for direction, rect in self.arrow_buttons.items():
            if rect.collidepoint(pos):
                self.game.make_move(direction)
                break

    def run(self):
        """main loop"""
        print("2048 Game Started!")
        print("Use arrow keys or buttons to move tiles")
        print("N: new game, S: settings, ESC: quit")
        print()

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = self.handle_keypress(event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.handle_click(event.pos)

            self.draw()
            pygame.display.flip()

            self.clock.tick(60)

        pygame.quit()


def main(settings=None, best_score_path=None):
    if best_score_path is None:
        best_score_path = os.path.join(os.path.expanduser("~"), ".merge2048_best_score.pkl")

    try:
        gui = GameGUI(settings=settings, best_score_path=best_score_path)
        gui.run()
    except Exception as e:
        print(f"Error running game: {e}")
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
