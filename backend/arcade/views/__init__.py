from arcade.views.auth_handlers import (
    login as login,
)
from arcade.views.auth_handlers import (
    logout as logout,
)
from arcade.views.auth_handlers import (
    register as register,
)
from arcade.views.leaderboard_handlers import (
    get_leaderboard as get_leaderboard,
)
from arcade.views.leaderboard_handlers import (
    get_seed as get_seed,
)
from arcade.views.profile_handlers import (
    add_friend as add_friend,
)
from arcade.views.profile_handlers import (
    me as me,
)
from arcade.views.run_handlers import (
    append_action as append_action,
)
from arcade.views.run_handlers import (
    finish_run as finish_run,
)
from arcade.views.run_handlers import (
    start_run as start_run,
)
