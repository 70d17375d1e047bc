import argparse
import json
import logging
import os
import random
import time
import uuid
from collections import deque
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Tuple

from dotenv import load_dotenv

from domain.constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES,
    DEFAULT_WIDTH, DEFAULT_HEIGHT, DEFAULT_MAX_ROUNDS, DEFAULT_NUM_APPLES,
)
from domain.direction import Direction
from domain.game_state import GameState
from domain.snake import Snake
from players import Player, RandomPlayer, SearchPlayer, get_player_class

load_dotenv()

logger = logging.getLogger(__name__)


def _get_round_delay() -> float:
    return float(os.getenv("SNAKEBENCH_ROUND_DELAY", "0") or 0)


def _get_completed_games_dir() -> str:
    d = os.getenv("SNAKEBENCH_COMPLETED_GAMES_DIR", "completed_games").strip()
    return d or "completed_games"


def _player_name(player) -> str:
    return getattr(player, 'name', None) or player.__class__.__name__


class SnakeGame:
    """
    Local host for the search player. Manages:
      - Board (width, height, obstacles)
      - Snakes
      - Players
      - Multiple apples
      - Scores
      - Rounds
      - History for replay
    """
    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
        num_apples: int = DEFAULT_NUM_APPLES,
        game_id: str = None,
        obstacles: Optional[List[Tuple[int, int]]] = None,
        rng: random.Random = None,
    ):
        self.width = width
        self.height = height
        self.snakes: Dict[str, Snake] = {}
        self.players: Dict[str, Player] = {}
        self.scores: Dict[str, int] = {}
        self.round_number = 0
        self.max_rounds = max_rounds
        self.game_over = False
        self.start_time = time.time()
        self.game_result = None
        self.rng = rng or random.Random()

        if game_id is None:
            self.game_id = str(uuid.uuid4())
        else:
            self.game_id = game_id
        logger.info(f"Game ID: {self.game_id}")

        self.obstacles: List[Tuple[int, int]] = []
        for (ox, oy) in obstacles or []:
            if not (0 <= ox < self.width and 0 <= oy < self.height):
                raise ValueError(f"Obstacle out of bounds at {(ox, oy)}.")
            self.obstacles.append((ox, oy))

        # Store how many apples we want to keep on the board at all times
        self.num_apples = num_apples

        # Apples are kept as a list to preserve GameState JSON-friendliness.
        self.apples: List[Tuple[int, int]] = []

        # For replay
        self.move_history: List[Dict[str, Any]] = []
        self.history: List[GameState] = []

        # Place initial apples
        for _ in range(self.num_apples):
            self.apples.append(self._random_free_cell())

    def add_snake(
        self,
        snake_id: str,
        player: Player,
        positions: Optional[List[Tuple[int, int]]] = None,
        direction: Direction = UP,
    ):
        if snake_id in self.snakes:
            raise ValueError(f"Snake with id {snake_id} already exists.")

        if positions is None:
            positions = [self._random_free_cell()]

        self.snakes[snake_id] = Snake(positions, direction=direction, snake_id=snake_id)
        self.players[snake_id] = player
        self.scores[snake_id] = 0

        logger.info(f"Added snake '{snake_id}' ({_player_name(player)}) at {positions[0]}.")

    def set_apples(self, apple_positions: List[Tuple[int, int]]):
        """
        Place the apples at exactly the given positions.
        """
        for (ax, ay) in apple_positions:
            if not (0 <= ax < self.width and 0 <= ay < self.height):
                raise ValueError(f"Apple out of bounds at {(ax, ay)}.")
        self.apples = list(apple_positions)
        logger.info(f"Set {len(self.apples)} apples on the board: {self.apples}")

    def _random_free_cell(self) -> Tuple[int, int]:
        """
        Return a random cell (x, y) not occupied by any snake, apple or obstacle.
        """
        occupied: Set[Tuple[int, int]] = set(self.obstacles) | set(self.apples)
        for snake in self.snakes.values():
            occupied.update(snake.positions)
        free = [
            (x, y)
            for x in range(self.width)
            for y in range(self.height)
            if (x, y) not in occupied
        ]
        if not free:
            raise ValueError("No free cell left on the board.")
        return self.rng.choice(free)

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        snake_positions = {}
        alive_dict = {}
        directions = {}
        for sid, snake in self.snakes.items():
            snake_positions[sid] = list(snake.positions)
            alive_dict[sid] = snake.alive
            directions[sid] = snake.direction

        return GameState(
            round_number=self.round_number,
            snake_positions=snake_positions,
            alive=alive_dict,
            scores=self.scores.copy(),
            width=self.width,
            height=self.height,
            apples=self.apples.copy(),
            move_history=list(self.move_history),
            max_rounds=self.max_rounds,
            obstacles=list(self.obstacles),
            directions=directions,
        )

    def _normalize_move(self, snake_id: str, move_data) -> Dict[str, Any]:
        """
        Turn a player's answer into move data with a valid "move".

        Players may answer with a plain direction string or a dict. Anything
        that is not a direction is replaced with a random move.
        """
        if not isinstance(move_data, dict):
            move_data = {"direction": move_data, "rationale": ""}

        try:
            move = Direction.parse(move_data.get("direction"))
        except ValueError:
            move = self.rng.choice(sorted(VALID_MOVES))
            logger.warning(
                f"Player {snake_id} returned an invalid direction "
                f"{move_data.get('direction')!r}. Choosing a random move: {move.value}"
            )

        return {
            "move": move.value,
            "rationale": move_data.get("rationale", ""),
            "input_tokens": move_data.get("input_tokens", 0),
            "output_tokens": move_data.get("output_tokens", 0),
            "cost": move_data.get("cost", 0.0),
        }

    def gather_moves_in_parallel(self) -> Dict[str, Dict[str, Any]]:
        """
        Gathers each alive snake's move in parallel using threads.
        Returns a dictionary: { snake_id: { "move": ..., "rationale": ..., ... }, ... }
        """
        round_moves = {}
        # Take one snapshot of the state to pass to each player
        state_snapshot = self.get_current_state()

        alive_snakes = [sid for sid, s in self.snakes.items() if s.alive]
        if not alive_snakes:
            return round_moves

        with ThreadPoolExecutor(max_workers=len(alive_snakes)) as executor:
            futures = {}
            for snake_id in alive_snakes:
                player = self.players[snake_id]
                futures[executor.submit(player.get_move, state_snapshot)] = snake_id

            for future in as_completed(futures):
                snake_id = futures[future]
                player = self.players[snake_id]
                try:
                    move_data = future.result()
                except Exception as exc:  # noqa: BLE001 - ensure the game continues
                    logger.error(
                        f"Player {snake_id} ({_player_name(player)}) failed: {exc}. "
                        "Falling back to a random move."
                    )
                    move_data = {"direction": None, "rationale": f"Player error: {exc}"}

                round_moves[snake_id] = self._normalize_move(snake_id, move_data)
                logger.info(f"Player {snake_id} ({_player_name(player)}) chose move: {round_moves[snake_id]['move']}")

        return round_moves

    def run_round(self):
        """
        Execute one round:
          1) If game is over, do nothing
          2) Ask each alive snake for their move
          3) Apply moves simultaneously
          4) Handle apple-eating (grow + score)
          5) Check collisions
          6) Possibly end game if round limit reached or 1 snake left, etc.
        """
        if self.game_over:
            logger.info("Game is already over. No more rounds.")
            return

        logger.debug("\n" + self.get_current_state().print_board())

        round_moves = self.gather_moves_in_parallel()

        # Store the moves of this round
        self.move_history.append(round_moves)

        self.record_history()

        # 2) Compute the intended new head for every snake
        new_heads: Dict[str, Optional[Tuple[int, int]]] = {}
        for sid, snake in self.snakes.items():
            move_data = round_moves.get(sid)
            if not snake.alive or move_data is None:
                new_heads[sid] = None
                continue

            move = Direction.parse(move_data["move"])
            snake.direction = move
            new_heads[sid] = tuple(move.step(snake.head))

        # --------------------------------------------------
        # 3) Build the *proposed* board after every snake moves
        # --------------------------------------------------
        eats_apple: Dict[str, bool] = {}
        proposed_bodies: Dict[str, List[Tuple[int, int]]] = {}

        for sid, snake in self.snakes.items():
            head = new_heads.get(sid)
            alive_and_moved = snake.alive and head is not None
            eats_apple[sid] = alive_and_moved and head in self.apples

            if not alive_and_moved:
                proposed_bodies[sid] = list(snake.positions)
                continue

            original_body = list(snake.positions)
            if eats_apple[sid]:
                # grow: keep the tail
                new_body = [head] + original_body
            else:
                # normal move: drop the tail
                new_body = [head] + original_body[:-1]

            proposed_bodies[sid] = new_body

        # --------------------------------------------------
        # 4) Collision detection on that proposed board
        # --------------------------------------------------
        obstacle_cells = set(self.obstacles)

        # a) wall and obstacle collisions
        for sid, head in new_heads.items():
            snake = self.snakes[sid]
            if not snake.alive or head is None:
                continue
            x, y = head
            if x < 0 or x >= self.width or y < 0 or y >= self.height:
                self._kill(snake, "wall")
            elif head in obstacle_cells:
                self._kill(snake, "obstacle")

        # b) head-to-head collisions
        head_counts: Dict[Tuple[int, int], List[str]] = {}
        for sid, head in new_heads.items():
            if head is not None and self.snakes[sid].alive:
                head_counts.setdefault(head, []).append(sid)

        for same_cell_snakes in head_counts.values():
            if len(same_cell_snakes) > 1:
                for sid in same_cell_snakes:
                    self._kill(self.snakes[sid], "head_collision")

        # c) head-into-body collisions
        body_cells: Set[Tuple[int, int]] = set()
        for sid, body in proposed_bodies.items():
            if self.snakes[sid].alive:
                body_cells.update(body[1:])   # exclude each snake's head

        for sid, head in new_heads.items():
            snake = self.snakes[sid]
            if not snake.alive or head is None:
                continue
            if head in body_cells:
                self._kill(snake, "body_collision")

        # Which snakes died this round?
        snakes_died_this_round = [
            sid for sid, s in self.snakes.items()
            if not s.alive and s.death_round == self.round_number
        ]

        # If exactly two snakes total, handle immediate win / tie logic
        if len(snakes_died_this_round) > 0 and len(self.snakes) == 2:
            if len(snakes_died_this_round) == 1:
                survivor = [sid for sid in self.snakes if self.snakes[sid].alive][0]
                self.game_over = True
                self.game_result = {snakes_died_this_round[0]: "lost", survivor: "won"}
            else:  # both died
                self.game_over = True
                self.game_result = {sid: "tied" for sid in self.snakes}

            logger.info(f"Game Over: {self.game_result}")
            self.round_number += 1
            self.record_history()
            return

        # --------------------------------------------------
        # 5) Commit the moves & handle apples for the survivors
        # --------------------------------------------------
        for sid, snake in self.snakes.items():
            if not snake.alive or new_heads.get(sid) is None:
                continue

            snake.positions = deque(proposed_bodies[sid])

            if eats_apple[sid]:
                self.scores[sid] += 1
                self.apples.remove(new_heads[sid])

        # keep apple count constant, as far as there is room
        while len(self.apples) < self.num_apples:
            try:
                self.apples.append(self._random_free_cell())
            except ValueError:
                break

        # --------------------------------------------------
        # 6) End-of-round bookkeeping (round limit / last snake)
        # --------------------------------------------------
        self.round_number += 1
        alive_snakes = [sid for sid, s in self.snakes.items() if s.alive]

        if self.round_number >= self.max_rounds:
            self.end_game("Reached max rounds.")
        elif len(alive_snakes) <= 1 and len(self.snakes) > 1:
            self.end_game("All but one snake are dead.")
        elif not alive_snakes:
            self.end_game("All snakes are dead.")

        logger.info(f"Finished round {self.round_number}. Alive: {alive_snakes}, Scores: {self.scores}")

        delay = _get_round_delay()
        if delay > 0:
            time.sleep(delay)

    def _kill(self, snake: Snake, reason: str):
        snake.alive = False
        snake.death_reason = reason
        snake.death_round = self.round_number

    def serialize_history(self, history: List[GameState]) -> List[Dict[str, Any]]:
        """
        Convert the list of GameState objects to a JSON-serializable list of dicts.
        """
        output = []
        for state in history:
            # Tuples become lists in JSON; Direction values are plain strings.
            output.append({
                "round_number": state.round_number,
                "snake_positions": {
                    sid: [list(p) for p in positions]
                    for sid, positions in state.snake_positions.items()
                },
                "alive": state.alive,
                "scores": state.scores,
                "width": state.width,
                "height": state.height,
                "apples": [list(a) for a in state.apples],
                "obstacles": [list(o) for o in state.obstacles],
                "directions": {sid: Direction.parse(d).value for sid, d in state.directions.items()},
                "move_history": state.move_history,
            })
        return output

    def build_replay(self) -> Dict[str, Any]:
        metadata = {
            "game_id": self.game_id,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.now(tz=timezone.utc).isoformat(),
            "players": {sid: _player_name(player) for sid, player in self.players.items()},
            "game_result": self.game_result,
            "final_scores": self.scores,
            "death_info": {
                sid: {
                    "reason": snake.death_reason,
                    "round": snake.death_round
                }
                for sid, snake in self.snakes.items()
                if not snake.alive
            },
            "max_rounds": self.max_rounds,
            "actual_rounds": self.round_number,
        }
        return {
            "metadata": metadata,
            "rounds": self.serialize_history(self.history)
        }

    def save_history_to_json(self, filename: str = None) -> str:
        if filename is None:
            filename = f"snake_game_{self.game_id}.json"

        directory = _get_completed_games_dir()
        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, filename)
        with open(path, "w") as f:
            json.dump(self.build_replay(), f, indent=2)

        logger.info(f"Saved replay to {path}")
        return path

    def end_game(self, reason: str):
        self.game_over = True
        logger.info(f"Game Over: {reason}")
        # Decide winner by highest score
        top_score = max(self.scores.values()) if self.scores else 0
        winners = [sid for sid, sc in self.scores.items() if sc == top_score]

        # Record the game result per snake
        self.game_result = {}
        for sid in self.scores:
            if sid in winners:
                self.game_result[sid] = "tied" if len(winners) > 1 else "won"
            else:
                self.game_result[sid] = "lost"

        if len(winners) == 1:
            logger.info(f"The winner is {winners[0]} with score {top_score}.")
        else:
            logger.info(f"Tie! Winners: {winners} with score {top_score}.")

    def record_history(self):
        self.history.append(self.get_current_state())


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(player_variants: List[str], game_params: argparse.Namespace) -> Dict:
    """
    Runs a single local game between the given player variants.

    Args:
        player_variants: Variant keys, one per snake (e.g. ['search', 'random']).
        game_params: An object (like argparse.Namespace) containing game settings
                     (width, height, max_rounds, num_apples, optional seed and save).

    Returns:
        A dictionary summarizing the game results (game_id, final_scores, game_result).
    """
    seed = getattr(game_params, 'seed', None)
    rng = random.Random(seed)

    game = SnakeGame(
        width=game_params.width,
        height=game_params.height,
        max_rounds=game_params.max_rounds,
        num_apples=game_params.num_apples,
        game_id=getattr(game_params, 'game_id', None),
        rng=rng,
    )

    for i, variant in enumerate(player_variants):
        player_cls = get_player_class(variant)
        if player_cls is RandomPlayer:
            player = RandomPlayer(str(i), rng=random.Random(rng.random()))
        else:
            player = player_cls(str(i))
        game.add_snake(snake_id=str(i), player=player)

    # Run the game loop
    while not game.game_over:
        game.run_round()

    result = {
        "game_id": game.game_id,
        "final_scores": game.scores,
        "game_result": game.game_result,
        "rounds": game.round_number,
    }

    if getattr(game_params, 'save', False):
        result["replay_path"] = game.save_history_to_json()

    return result


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Run a local Snake game between search and baseline players."
    )
    parser.add_argument("--players", type=str, nargs='+', default=["search", "random"],
                        help="Player variant per snake (e.g. 'search search random')")
    parser.add_argument("--width", type=int, required=False, default=DEFAULT_WIDTH,
                        help="Width of the board from 0 to N")
    parser.add_argument("--height", type=int, required=False, default=DEFAULT_HEIGHT,
                        help="Height of the board from 0 to N")
    parser.add_argument("--max_rounds", type=int, required=False, default=DEFAULT_MAX_ROUNDS,
                        help="Maximum number of rounds")
    parser.add_argument("--num_apples", type=int, required=False, default=DEFAULT_NUM_APPLES,
                        help="Number of apples on the board")
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Random seed for apple and spawn placement")
    parser.add_argument("--save", action="store_true",
                        help="Write the replay JSON to SNAKEBENCH_COMPLETED_GAMES_DIR")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.players:
        raise ValueError("At least one player must be provided.")

    result = run_simulation(args.players, args)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
