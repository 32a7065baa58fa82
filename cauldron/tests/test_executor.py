"""
Tests for the action executor (state transitions).

Tests:
- Affordability and capacity rejection
- Category-specific side effects
- Disabled/learned/completed set updates
- Root action propagation and depth
"""

import pytest

from ..config import SearchConfig
from ..engine_core.action import Action
from ..engine_core.executor import ActionExecutor, execute
from ..engine_core.repository import ActionRepository
from ..engine_core.state import State
from ..errors import UnknownActionError
from .conftest import (
    REST_ID,
    PRODUCE_BLUE,
    BLUE_TO_GREEN,
    TOME_SPELL,
    CHEAP_ORDER,
    RICH_ORDER,
)


def walk(repo, state, depth, executor=None):
    """Yield (parent, child) pairs of the whole tree down to `depth`."""
    executor = executor or ActionExecutor()
    if depth == 0:
        return
    for child in executor.children(repo, state):
        yield state, child
        yield from walk(repo, child, depth - 1, executor)


class TestAffordability:
    """Tests for resource and capacity checks."""

    def test_capacity_rejection(self, config):
        """Nine ingredients plus two exceeds the capacity of ten."""
        repo = ActionRepository.build([Action.cast(1, (2, 0, 0, 0))], config)
        state = State.initial((9, 0, 0, 0))

        assert execute(repo, state, 1) is None

    def test_exact_capacity_allowed(self, config):
        """Reaching exactly ten ingredients is allowed."""
        repo = ActionRepository.build([Action.cast(1, (2, 0, 0, 0))], config)
        state = State.initial((8, 0, 0, 0))

        child = execute(repo, state, 1)

        assert child is not None
        assert child.ingredients == (10, 0, 0, 0)

    def test_insufficient_ingredients_rejected(self, repo):
        """Consuming more than held rejects the transition."""
        state = State.initial((0, 0, 0, 0))

        assert execute(repo, state, BLUE_TO_GREEN) is None
        assert execute(repo, state, CHEAP_ORDER) is None

    def test_capacity_uses_configured_limit(self):
        """The capacity constant comes from the config."""
        small = SearchConfig(max_ingredients=5)
        repo = ActionRepository.build([Action.cast(1, (2, 0, 0, 0))], small)
        state = State.initial((4, 0, 0, 0))

        assert ActionExecutor(config=small).execute(repo, state, 1) is None

    def test_every_reachable_state_within_limits(self, repo, initial_state, config):
        """Every produced state is non-negative and within capacity."""
        for _, child in walk(repo, initial_state, 3):
            assert all(count >= 0 for count in child.ingredients)
            assert sum(child.ingredients) <= config.max_ingredients


class TestUnknownAction:
    """Tests for ids missing from the repository."""

    def test_unknown_id_pruned(self, repo, initial_state):
        """Unknown ids are pruned like unaffordable actions."""
        assert execute(repo, initial_state, 12345) is None

    def test_unknown_id_strict_raises(self, repo, initial_state):
        """Strict executors fail loudly on unknown ids."""
        executor = ActionExecutor(strict=True)

        with pytest.raises(UnknownActionError):
            executor.execute(repo, initial_state, 12345)


class TestRest:
    """Tests for the rest action."""

    def test_rest_clears_disabled(self, repo):
        """Rest always yields an empty disabled set."""
        state = State.initial((3, 0, 0, 0), disabled={PRODUCE_BLUE, BLUE_TO_GREEN})

        child = execute(repo, state, REST_ID)

        assert child.disabled == frozenset()

    def test_rest_keeps_everything_else(self, repo):
        """Rest keeps ingredients, rupees, learned and completed sets."""
        state = State(
            ingredients=(1, 2, 0, 0),
            rupees=7,
            disabled=frozenset({PRODUCE_BLUE}),
            learned=frozenset({TOME_SPELL}),
            completed=frozenset({CHEAP_ORDER}),
            depth=2,
            root_action_id=PRODUCE_BLUE,
        )

        child = execute(repo, state, REST_ID)

        assert child.ingredients == (1, 2, 0, 0)
        assert child.rupees == 7
        assert child.learned == {TOME_SPELL}
        assert child.completed == {CHEAP_ORDER}
        assert child.depth == 3
        assert child.root_action_id == PRODUCE_BLUE

    def test_rest_is_idempotent_on_empty_disabled(self, repo, initial_state):
        """Resting with nothing disabled is still legal."""
        child = execute(repo, initial_state, REST_ID)

        assert child is not None
        assert child.disabled == frozenset()


class TestCast:
    """Tests for learned spells."""

    def test_cast_applies_delta(self, repo, initial_state):
        """Casting applies the spell's delta."""
        child = execute(repo, initial_state, BLUE_TO_GREEN)

        assert child.ingredients == (2, 1, 0, 0)

    def test_cast_disables_until_rest(self, repo, initial_state):
        """A cast spell is disabled, and rest re-enables it."""
        child = execute(repo, initial_state, BLUE_TO_GREEN)

        assert BLUE_TO_GREEN in child.disabled
        assert not child.is_active(BLUE_TO_GREEN)

        rested = execute(repo, child, REST_ID)
        assert rested.is_active(BLUE_TO_GREEN)


class TestLearn:
    """Tests for tome spells."""

    def test_learn_only_pays_tax(self, repo, initial_state):
        """Learning charges the tome index and pays the tax gain, not the spell delta."""
        child = execute(repo, initial_state, TOME_SPELL)

        # 3 - 1 (tome index) + 2 (tax gain); the +3 spell delta does not apply
        assert child.ingredients == (4, 0, 0, 0)
        assert TOME_SPELL in child.learned

    def test_learn_bonus_is_capped(self, config):
        """The tax gain is capped by the remaining capacity."""
        repo = ActionRepository.build(
            [Action.learn(5, (0, 1, 0, 0), tome_index=0, tax_gain=5)],
            config,
        )
        state = State.initial((8, 0, 0, 1))

        child = execute(repo, state, 5)

        assert child.ingredients == (9, 0, 0, 1)
        assert sum(child.ingredients) == config.max_ingredients

    def test_learn_unaffordable_tome_index(self, config):
        """Learning needs enough tier-0 ingredients for the tome index."""
        repo = ActionRepository.build([Action.learn(5, (0, 1, 0, 0), tome_index=2)], config)
        state = State.initial((1, 3, 0, 0))

        assert execute(repo, state, 5) is None

    def test_fresh_learn_is_not_disabled(self, repo, initial_state):
        """A freshly learned spell stays castable in the same branch."""
        child = execute(repo, initial_state, TOME_SPELL)

        assert TOME_SPELL not in child.disabled
        assert child.is_active(TOME_SPELL)

    def test_learned_spell_casts_normally(self, repo, initial_state):
        """Once learned, the spell applies its own delta."""
        learned = execute(repo, initial_state, TOME_SPELL)
        cast = execute(repo, learned, TOME_SPELL)

        assert cast.ingredients == (7, 0, 0, 0)
        assert TOME_SPELL in cast.disabled
        assert TOME_SPELL in cast.learned

    def test_learned_spell_recast_without_rest(self, repo, initial_state):
        """A learned spell stays active after casting, so it can be cast again before a rest."""
        learned = execute(repo, initial_state, TOME_SPELL)
        once = execute(repo, learned, TOME_SPELL)

        assert once.is_active(TOME_SPELL)

        twice = execute(repo, once, TOME_SPELL)

        assert twice is not None
        assert twice.ingredients == (10, 0, 0, 0)
        assert twice.disabled == {TOME_SPELL}


class TestBrew:
    """Tests for potion orders."""

    def test_brew_pays_price(self, repo, initial_state):
        """Brewing consumes the cost and earns the price."""
        child = execute(repo, initial_state, CHEAP_ORDER)

        assert child.ingredients == (1, 0, 0, 0)
        assert child.rupees == 10

    def test_brew_completes_permanently(self, repo, initial_state):
        """A brewed order stays completed after rest."""
        child = execute(repo, initial_state, CHEAP_ORDER)
        assert CHEAP_ORDER in child.completed
        assert not child.is_active(CHEAP_ORDER)

        rested = execute(repo, child, REST_ID)
        assert CHEAP_ORDER in rested.completed
        assert not rested.is_active(CHEAP_ORDER)

    def test_brew_needs_every_tier(self, repo):
        """An order needing two tiers is rejected if one is missing."""
        state = State.initial((0, 1, 0, 0))

        assert execute(repo, state, RICH_ORDER) is None


class TestBranchBookkeeping:
    """Tests for depth and root action attribution."""

    def test_first_action_becomes_root(self, repo, initial_state):
        """The depth-1 action is recorded as the branch's root."""
        child = execute(repo, initial_state, PRODUCE_BLUE)

        assert child.root_action_id == PRODUCE_BLUE
        assert child.depth == 1

    def test_depth_monotonic(self, repo, initial_state):
        """Every child is exactly one deeper than its parent."""
        for parent, child in walk(repo, initial_state, 3):
            assert child.depth == parent.depth + 1

    def test_root_action_preserved(self, repo, initial_state):
        """Descendants keep the root action of their depth-1 ancestor."""
        for parent, child in walk(repo, initial_state, 3):
            if parent.root_action_id is not None:
                assert child.root_action_id == parent.root_action_id

    def test_parent_unchanged(self, repo, initial_state):
        """Transitions never mutate the parent state."""
        before = (initial_state.ingredients, initial_state.disabled, initial_state.learned)

        execute(repo, initial_state, TOME_SPELL)
        execute(repo, initial_state, BLUE_TO_GREEN)

        assert before == (initial_state.ingredients, initial_state.disabled, initial_state.learned)

    def test_children_are_unscored(self, repo, initial_state):
        """Fresh children carry no cached score."""
        child = execute(repo, initial_state, PRODUCE_BLUE)

        assert child.score is None
        assert child.with_score(1.5).score == 1.5


class TestRepeatableCast:
    """Tests for casting a repeatable spell several times at once."""

    @pytest.fixture
    def repeat_repo(self, config):
        return ActionRepository.build(
            [
                Action.cast(1, (-1, 1, 0, 0), repeatable=True),
                Action.cast(2, (2, 0, 0, 0)),
                Action.learn(3, (0, 0, 1, 0), tome_index=0, repeatable=True),
            ],
            config,
        )

    def test_times_scales_delta(self, repeat_repo):
        child = execute(repeat_repo, State.initial((3, 0, 0, 0)), 1, times=2)

        assert child.ingredients == (1, 2, 0, 0)
        assert 1 in child.disabled

    def test_scaled_cost_must_be_affordable(self, repeat_repo):
        assert execute(repeat_repo, State.initial((1, 0, 0, 0)), 1, times=2) is None

    def test_non_repeatable_rejects_times(self, repeat_repo):
        assert execute(repeat_repo, State.initial((0, 0, 0, 0)), 2, times=2) is None

    def test_times_above_limit_rejected(self, repeat_repo):
        assert execute(repeat_repo, State.initial((5, 0, 0, 0)), 1, times=3) is None

    def test_limit_comes_from_config(self, repeat_repo):
        executor = ActionExecutor(config=SearchConfig(max_cast_repeat=3))

        child = executor.execute(repeat_repo, State.initial((5, 0, 0, 0)), 1, times=3)

        assert child.ingredients == (2, 3, 0, 0)

    def test_learning_is_never_repeated(self, repeat_repo):
        """Only a learned tome spell can be cast several times."""
        state = State.initial((0, 0, 0, 0))
        assert execute(repeat_repo, state, 3, times=2) is None

        learned = execute(repeat_repo, state, 3)
        assert execute(repeat_repo, learned, 3, times=2).ingredients == (0, 0, 2, 0)

    def test_root_times_recorded(self, repeat_repo):
        child = execute(repeat_repo, State.initial((3, 0, 0, 0)), 1, times=2)
        grandchild = execute(repeat_repo, child, REST_ID)

        assert child.root_times == 2
        assert grandchild.root_action_id == 1
        assert grandchild.root_times == 2

    def test_moves_expand_repeat_counts(self, repeat_repo):
        moves = list(ActionExecutor().moves(repeat_repo, State.initial((3, 0, 0, 0))))

        assert moves == [(REST_ID, 1), (1, 1), (1, 2), (2, 1), (3, 1)]
