"""Terrain effects system.

Usage:
- Create one TerrainEffectRuntime per level (it wraps the level's
  TerrainQuery) and call ``update(entities)`` once per tick with the player,
  followers and enemies.
- Route physics contacts with collidable tiles to
  ``handle_terrain_collision(entity, (tx, ty))``, or let
  ``handle_contacts(entity)`` find them from the entity's rect.
- Entities expose ``position`` (or a pygame ``rect``) and a mutable
  ``speed``; those with a callable ``damage(amount)`` also take terrain
  damage. Per-entity bookkeeping is attached lazily as ``terrain_state``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

import pygame

from config import COLLISION_DAMAGE_COOLDOWN_MS, TERRAIN_DAMAGE_COOLDOWN_MS
from src.systems.terrain_query import TerrainQuery
from src.tiles.tile_collision import TerrainCollision
from src.tiles.tile_data import EffectRecord

logger = logging.getLogger(__name__)

STATE_ATTR = 'terrain_state'

DamageListener = Callable[[Any, EffectRecord, str], None]


@runtime_checkable
class TakesTerrainDamage(Protocol):
    """Capability of entity kinds that terrain can hurt."""

    def damage(self, amount: int) -> Any:
        ...


def can_take_terrain_damage(entity: Any) -> bool:
    # Protocol checks only test presence; an int ``damage`` stat must not match
    return isinstance(entity, TakesTerrainDamage) and callable(entity.damage)


def is_active(entity: Any) -> bool:
    if not getattr(entity, 'active', True):
        return False
    alive = getattr(entity, 'alive', True)
    # pygame sprites expose alive() as a method
    if callable(alive):
        alive = alive()
    return bool(alive)


def entity_position(entity: Any) -> Optional[Tuple[float, float]]:
    """World position of an entity: ``position`` if set, else its rect center."""
    position = getattr(entity, 'position', None)
    if position is not None:
        return (position[0], position[1])
    rect = getattr(entity, 'rect', None)
    if rect is not None:
        return rect.center
    return None


@dataclass
class EntityTerrainState:
    """Terrain bookkeeping attached to one entity for its lifetime."""
    original_speed: Optional[float] = None
    slowed: bool = False
    last_terrain_damage_time: Optional[int] = None
    last_terrain_name: Optional[str] = None
    on_damaging_terrain: bool = False

    def arm_damage_cooldown(self, now: int) -> None:
        """Restart the cooldown window on entering damaging terrain, without
        dealing damage."""
        self.last_terrain_damage_time = now

    def consume_damage_cooldown(self, now: int, interval: int) -> bool:
        """The single cooldown check both damage paths go through.

        Returns True (and restarts the window) when at least ``interval`` ms
        have passed since the last terrain damage of any kind.
        """
        last = self.last_terrain_damage_time
        if last is not None and now - last < interval:
            return False
        self.last_terrain_damage_time = now
        return True


@dataclass(frozen=True)
class TerrainTransition:
    entity: Any
    previous: Optional[str]
    current: str


class TerrainEffectRuntime:
    """Applies slow and damage effects of the tile under each entity."""

    def __init__(self, query: TerrainQuery,
                 ambient_cooldown_ms: int = TERRAIN_DAMAGE_COOLDOWN_MS,
                 collision_cooldown_ms: int = COLLISION_DAMAGE_COOLDOWN_MS,
                 clock: Optional[Callable[[], int]] = None):
        self.query = query
        self.collision = TerrainCollision(query.grid, query.registry)
        self.ambient_cooldown_ms = ambient_cooldown_ms
        self.collision_cooldown_ms = collision_cooldown_ms
        self.clock = clock or pygame.time.get_ticks
        self._damage_listeners: List[DamageListener] = []

    def add_damage_listener(self, listener: DamageListener) -> None:
        """``listener(entity, effect, source)``; source is 'ambient' or 'collision'."""
        self._damage_listeners.append(listener)

    def remove_damage_listener(self, listener: DamageListener) -> None:
        self._damage_listeners.remove(listener)

    @staticmethod
    def state_of(entity: Any) -> Optional[EntityTerrainState]:
        return getattr(entity, STATE_ATTR, None)

    def _ensure_state(self, entity: Any) -> EntityTerrainState:
        state = self.state_of(entity)
        if state is None:
            state = EntityTerrainState()
            setattr(entity, STATE_ATTR, state)
        return state

    def update(self, entities: Iterable[Any], now: Optional[int] = None) -> List[TerrainTransition]:
        """Apply terrain effects to every entity; returns this tick's transitions."""
        now = self.clock() if now is None else now
        transitions = []
        for entity in entities:
            transition = self.apply_terrain_effects(entity, now)
            if transition is not None:
                transitions.append(transition)
        return transitions

    def apply_terrain_effects(self, entity: Any, now: Optional[int] = None) -> Optional[TerrainTransition]:
        if entity is None or not is_active(entity):
            return None
        position = entity_position(entity)
        if position is None:
            return None
        effect = self.query.effect_at(*position)
        if effect is None:
            return None

        now = self.clock() if now is None else now
        state = self._ensure_state(entity)
        self._apply_speed(entity, state, effect)

        if effect.is_damaging and can_take_terrain_damage(entity):
            if not state.on_damaging_terrain:
                state.on_damaging_terrain = True
                state.arm_damage_cooldown(now)
            elif state.consume_damage_cooldown(now, self.ambient_cooldown_ms):
                self._deal_damage(entity, effect, 'ambient')
        else:
            state.on_damaging_terrain = False

        if state.last_terrain_name != effect.name:
            transition = TerrainTransition(entity, state.last_terrain_name, effect.name)
            state.last_terrain_name = effect.name
            logger.debug("%s entered %s terrain (slow_factor %.2f)",
                         type(entity).__name__, effect.name, effect.slow_factor)
            return transition
        return None

    def _apply_speed(self, entity: Any, state: EntityTerrainState, effect: EffectRecord) -> None:
        if not hasattr(entity, 'speed'):
            return

        # Re-read the base speed only while unslowed so buffs picked up on
        # open ground stick, and a slowed speed is never taken as the base.
        if not state.slowed:
            state.original_speed = entity.speed

        if effect.slows:
            new_speed = state.original_speed * effect.slow_factor
            if entity.speed != new_speed:
                logger.debug("Speed %s -> %s on %s", entity.speed, new_speed, effect.name)
            entity.speed = new_speed
            state.slowed = True
        elif state.slowed:
            entity.speed = state.original_speed
            state.slowed = False

    def handle_terrain_collision(self, entity: Any, tile_coord: Tuple[int, int],
                                 now: Optional[int] = None) -> bool:
        """Physics contact callback. Returns True if damage was applied.

        Shares the per-entity cooldown with the ambient path, so a contact and
        a position sample can never both hurt inside the same window.
        """
        if entity is None or tile_coord is None or not is_active(entity):
            return False
        state = self.state_of(entity)
        if state is None:
            return False

        terrain_type = self.query.grid.tile_at(*tile_coord)
        if not self.collision.is_collidable(terrain_type):
            return False
        effect = self.query.registry.effect_of(terrain_type)
        if not effect.is_damaging or not can_take_terrain_damage(entity):
            return False

        now = self.clock() if now is None else now
        if not state.consume_damage_cooldown(now, self.collision_cooldown_ms):
            return False
        self._deal_damage(entity, effect, 'collision')
        return True

    def handle_contacts(self, entity: Any, rect: Optional[pygame.Rect] = None,
                        now: Optional[int] = None) -> int:
        """Run the collision callback for every collidable tile under ``rect``
        (defaults to ``entity.rect``). Returns how many contacts dealt damage."""
        rect = rect if rect is not None else getattr(entity, 'rect', None)
        if rect is None:
            return 0
        now = self.clock() if now is None else now
        return sum(
            1 for tile in self.collision.colliding_tiles(rect)
            if self.handle_terrain_collision(entity, tile, now)
        )

    def release_entity(self, entity: Any) -> None:
        """Restore base speed and drop terrain state (level teardown)."""
        state = self.state_of(entity)
        if state is None:
            return
        if state.slowed and hasattr(entity, 'speed'):
            entity.speed = state.original_speed
        delattr(entity, STATE_ATTR)

    def _deal_damage(self, entity: Any, effect: EffectRecord, source: str) -> None:
        entity.damage(effect.damage)
        logger.debug("Applied %d damage from %s terrain (%s)", effect.damage, effect.name, source)
        for listener in self._damage_listeners:
            listener(entity, effect, source)
