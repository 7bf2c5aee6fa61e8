"""Tests for placement configs of requested powers."""

from constants import (
    MealPower,
    PowerType,
    TypeAllocation,
)
from models.recipe import Power
from placement import (
    TargetConfig,
    fill_in,
    get_meal_power_targets_by_place,
    get_target_configs,
    get_type_target_indices,
    herba_slots,
    permute_power_configs,
    select_power_at_target_position,
    sort_target_powers_by_mp_place,
)
from powers import rank_type_boosts
from vector_math import zeros

ENCOUNTER_FIRE_2 = Power(MealPower.ENCOUNTER, PowerType.FIRE, 2)


class TestHerbaSlots:
    def test_slots(self) -> None:
        assert herba_slots(0) == ()
        assert herba_slots(1) == (MealPower.TITLE,)
        assert herba_slots(2) == (MealPower.SPARKLING, MealPower.TITLE)


class TestGetTargetConfigs:
    """Tests for get_target_configs()."""

    def test_sparkling_level_three(self) -> None:
        """Two herba: one ONE_ONE_ONE config at the first place."""
        (configs,) = get_target_configs(
            [Power(MealPower.SPARKLING, PowerType.GROUND, 3)], 2
        )
        assert configs == [
            TargetConfig(
                type_allocation=TypeAllocation.ONE_ONE_ONE,
                type_place_index=0,
                mp_place_index=0,
                num_herba=2,
                first_type_gt=480,
            )
        ]

    def test_level_two_without_herba(self) -> None:
        """No ONE_ONE_ONE, and no third place below the 280 band."""
        (configs,) = get_target_configs([ENCOUNTER_FIRE_2], 0)
        assert len(configs) == 7
        assert all(c.type_allocation is not TypeAllocation.ONE_ONE_ONE for c in configs)
        assert not any(
            c.mp_place_index == 2
            and c.type_allocation
            in (TypeAllocation.ONE_THREE_ONE, TypeAllocation.ONE_THREE_TWO)
            for c in configs
        )

    def test_level_two_thresholds(self) -> None:
        (configs,) = get_target_configs([ENCOUNTER_FIRE_2], 0)
        by_key = {(c.type_allocation, c.mp_place_index): c for c in configs}
        first = by_key[(TypeAllocation.ONE_THREE_ONE, 0)]
        assert first.first_type_gte == 180
        assert first.first_type_lte == 280
        assert first.diff70
        second = by_key[(TypeAllocation.ONE_THREE_TWO, 1)]
        assert second.type_place_index == 2
        assert second.third_type_gte == 180
        assert not second.diff70

    def test_title_needs_herba(self) -> None:
        assert get_target_configs([Power(MealPower.TITLE, PowerType.NORMAL, 1)], 0) == [[]]

    def test_regular_power_after_herba_places(self) -> None:
        (configs,) = get_target_configs([ENCOUNTER_FIRE_2], 1)
        assert {c.mp_place_index for c in configs} == {1, 2}


class TestPermutePowerConfigs:
    """Tests for permute_power_configs()."""

    def test_shared_place_dropped(self) -> None:
        powers = [ENCOUNTER_FIRE_2, Power(MealPower.CATCH, PowerType.FIRE, 1)]
        config_sets = permute_power_configs(get_target_configs(powers, 0), powers)
        assert config_sets
        for first, second in config_sets:
            assert first.mp_place_index != second.mp_place_index
            assert first.type_allocation is second.type_allocation

    def test_two_types_for_one_place_dropped(self) -> None:
        config = TargetConfig(TypeAllocation.ONE_ONE_THREE, 0, 0)
        other = TargetConfig(TypeAllocation.ONE_ONE_THREE, 0, 1)
        powers = [ENCOUNTER_FIRE_2, Power(MealPower.CATCH, PowerType.WATER, 1)]
        assert permute_power_configs([[config], [other]], powers) == []
        assert permute_power_configs([[config], [other]]) == [[config, other]]


class TestPlaceHelpers:
    """Tests for the by-place helpers."""

    def test_fill_in(self) -> None:
        assert fill_in([None, PowerType.FIRE, None], PowerType) == [
            PowerType.NORMAL,
            PowerType.FIRE,
            PowerType.FIGHTING,
        ]

    def test_type_target_indices(self) -> None:
        types = get_type_target_indices(
            [ENCOUNTER_FIRE_2], [2], rank_type_boosts(zeros(18))
        )
        assert types == [PowerType.NORMAL, PowerType.FIGHTING, PowerType.FIRE]

    def test_egg_has_no_type_target(self) -> None:
        types = get_type_target_indices(
            [Power(MealPower.EGG, PowerType.FIRE, 1)], [0], rank_type_boosts(zeros(18))
        )
        assert types[0] is PowerType.NORMAL

    def test_meal_power_targets_by_place(self) -> None:
        assert get_meal_power_targets_by_place([ENCOUNTER_FIRE_2], [1], 1) == [
            MealPower.ENCOUNTER,
            None,
        ]

    def test_select_power_at_target_position(self) -> None:
        config = TargetConfig(TypeAllocation.ONE_THREE_ONE, 0, 1)
        assert select_power_at_target_position([ENCOUNTER_FIRE_2], config) is None
        assert (
            select_power_at_target_position([ENCOUNTER_FIRE_2] * 2, config)
            == ENCOUNTER_FIRE_2
        )

    def test_sort_by_place_descending(self) -> None:
        catch = Power(MealPower.CATCH, PowerType.FIRE, 1)
        pairs = sort_target_powers_by_mp_place(
            [ENCOUNTER_FIRE_2, catch],
            [
                TargetConfig(TypeAllocation.ONE_THREE_ONE, 0, 0),
                TargetConfig(TypeAllocation.ONE_THREE_ONE, 2, 1),
            ],
        )
        assert [power for power, _ in pairs] == [catch, ENCOUNTER_FIRE_2]
