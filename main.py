from tourney.exceptions import MatchFinishedError
from tourney.models import FifthSetTieBreakRule
from tourney.scoreboard import Scoreboard

board = Scoreboard(best_of=5, fifth_set_rule=FifthSetTieBreakRule.AT_12_12)


def point_for(side):
    if board.server_index == side:
        board.add_server_point()
    else:
        board.add_receiver_point()


# Set 1: first player
for _ in range(24):
    point_for(0)

# Set 2: second player
for _ in range(24):
    point_for(1)

# Set 3: 6-6 then tie-break 7-5
for _ in range(6):
    for _ in range(4):
        point_for(0)
    for _ in range(4):
        point_for(1)

for _ in range(5):
    point_for(0)
    point_for(1)
point_for(0)
point_for(0)

# Set 4: first player -> match winner
for _ in range(24):
    point_for(0)

print("Before illegal point:")
print(board)

print("\nTrying to add illegal point...")

try:
    board.add_server_point()
except MatchFinishedError as e:
    print(f"Rejected: {e}")
