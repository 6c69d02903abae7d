"""Split/merge orchestration for party composites.

The orchestrator is the only component that mutates the scene. Every
operation validates its arguments first, then creates new entities, and only
then destroys the ones they replace, so a failure part way through leaves the
scene as it was before the call.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
import logging

from muster.core.aggregation.light import LightAggregator
from muster.core.aggregation.movement import MovementAggregator, aggregate_movement
from muster.core.aggregation.scheduler import RecomputeScheduler
from muster.core.config.models import MusterConfig
from muster.core.errors import (
    ConfigurationError,
    FormationNotFoundError,
    MissingAgentData,
    OperationInProgressError,
    PersistenceWriteFailure,
    PlacementExhausted,
)
from muster.core.formations.defaults import CUSTOM_FORMATION_KEY, create_default_formation_registry
from muster.core.formations.registry import FormationRegistry
from muster.core.models.agent import AgentRecord, AgentSpawn
from muster.core.models.geometry import Facing, Footprint, GridOffset, Point
from muster.core.models.light import LightProfile
from muster.core.models.movement import MovementProfile
from muster.core.party.follow import FollowLeader
from muster.core.party.library import PartyLibrary
from muster.core.party.models import (
    DeploymentPlan,
    MemberPlacement,
    MemberRecord,
    PartyComposite,
)
from muster.core.placement.engine import plan_slots, placement_order
from muster.core.placement.resolver import BatchClaims, SpotResolver
from muster.core.placement.rotation import natural_facing, rotation_steps
from muster.core.utils.math import half_up
from muster.core.world.notify import LoggingNotifier
from muster.core.world.protocols import (
    CompositeStore,
    EntityDirectory,
    Notifier,
    OccupancyQuery,
    SpatialService,
)

logger = logging.getLogger(__name__)

SAVED_FORMATION_KEY = "saved"

OffsetResolver = Callable[[MemberRecord, int, int], GridOffset]


def capture_offset(
    center: Point,
    footprint: Footprint,
    anchor_center: Point,
    anchor_footprint: Footprint,
    grid_size: float,
) -> GridOffset:
    """Grid offset of an agent's top-left cell from the leader slot.

    Measured between centres and corrected for the size difference, so
    agents larger than the leader keep their exact cell.
    """
    return GridOffset(
        dx=half_up(
            (center.x - anchor_center.x) / grid_size
            - (footprint.width - anchor_footprint.width) / 2
        ),
        dy=half_up(
            (center.y - anchor_center.y) / grid_size
            - (footprint.height - anchor_footprint.height) / 2
        ),
    )


def _as_offset(value: GridOffset | Sequence[int] | Mapping[str, int]) -> GridOffset:
    if isinstance(value, GridOffset):
        return value
    if isinstance(value, Mapping):
        return GridOffset.model_validate(value)
    dx, dy = value
    return GridOffset(dx=int(dx), dy=int(dy))


def _as_facing(value: Facing | str) -> Facing:
    try:
        return Facing(value)
    except ValueError as e:
        choices = ", ".join(f.value for f in Facing)
        raise ConfigurationError(f"Unknown facing '{value}'. Expected one of: {choices}") from e


class PartyOrchestrator:
    """Merges agents into parties and deploys them back out.

    Args:
        spatial: Grid size and obstruction tests.
        occupancy: Placed-agent rectangles.
        directory: Agent lookup, creation and destruction.
        store: Composite record storage.
        notifier: User notifications (defaults to logging).
        config: Application configuration.
        registry: Formation presets (defaults to the built-in set).
        library: Saved formations and party configurations.
        loop: Event loop for debounced recomputes (running loop by default).

    Example:
        >>> scene = InMemoryScene()
        >>> orchestrator = PartyOrchestrator(scene, scene, scene, scene)
        >>> party_id = orchestrator.merge_members(["a", "b", "c"])
        >>> orchestrator.deploy_all(party_id, formation_key="wedge", facing="east")
        ['a', 'b', 'c']
    """

    def __init__(
        self,
        spatial: SpatialService,
        occupancy: OccupancyQuery,
        directory: EntityDirectory,
        store: CompositeStore,
        notifier: Notifier | None = None,
        config: MusterConfig | None = None,
        registry: FormationRegistry | None = None,
        library: PartyLibrary | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.spatial = spatial
        self.occupancy = occupancy
        self.directory = directory
        self.store = store
        self.notifier = notifier or LoggingNotifier()
        self.config = config or MusterConfig()
        self.registry = registry or create_default_formation_registry()
        self.library = library or PartyLibrary()

        self.light_aggregator = LightAggregator(directory)
        self.movement_aggregator = MovementAggregator(directory, self.config.movement)
        self.scheduler = RecomputeScheduler(
            self.refresh_composite,
            delay_ms=self.config.aggregation.recompute_debounce_ms,
            loop=loop,
        )
        self.follow = FollowLeader(directory)
        self._in_flight: set[str] = set()

        directory.subscribe(self._on_data_ready)

    # ------------------------------------------------------------------
    # Guards and lookups
    # ------------------------------------------------------------------

    @contextmanager
    def _exclusive(self, *keys: str) -> Iterator[None]:
        for key in keys:
            if key in self._in_flight:
                raise OperationInProgressError(key)
        self._in_flight.update(keys)
        try:
            yield
        finally:
            self._in_flight.difference_update(keys)

    def in_flight(self, key: str) -> bool:
        return key in self._in_flight

    def get_composite(self, composite_id: str) -> PartyComposite:
        """Load a composite, with its position synced to the placed entity.

        Raises:
            ConfigurationError: If no composite is stored under the id.
        """
        data = self.store.load(composite_id)
        if data is None:
            raise ConfigurationError(f"Unknown party '{composite_id}'")
        composite = PartyComposite.from_record(data)

        placed = self.directory.get(composite_id)
        if placed is not None and placed.position is not None and placed.position != composite.position:
            composite = composite.model_copy(update={"position": placed.position})
        return composite

    def list_composites(self) -> list[str]:
        return self.store.list_ids()

    def _persist(self, composite: PartyComposite) -> None:
        try:
            self.store.save(composite.composite_id, composite.to_record())
        except Exception as e:
            raise PersistenceWriteFailure(composite.composite_id, e) from e

    def _formation_known(self, key: str, custom_offsets: Mapping[str, GridOffset] | None) -> bool:
        if self.registry.has(key):
            return True
        if key == SAVED_FORMATION_KEY:
            return bool(custom_offsets)
        return self.library.get_formation(key) is not None

    def _available_formations(self) -> list[str]:
        return self.registry.list_formations() + self.library.list_formations()

    def _offset_resolver(self, composite: PartyComposite, key: str) -> OffsetResolver:
        if self.registry.has(key):
            preset = self.registry.get(key)
            return lambda m, i, n: preset.transform(m.offset.dx, m.offset.dy, index=i, total=n)

        if key == SAVED_FORMATION_KEY:
            table = composite.custom_offsets
            if not table:
                raise ConfigurationError(f"Party '{composite.composite_id}' has no saved offsets")
            return lambda m, i, n: table.get(m.agent_id, m.offset)

        saved = self.library.get_formation(key)
        if saved is not None:
            return lambda m, i, n: saved.offset_for(m.agent_id, m.offset)

        raise FormationNotFoundError(key, available=self._available_formations())

    # ------------------------------------------------------------------
    # Merge
    # ------------------------------------------------------------------

    def merge_members(
        self,
        agent_ids: Sequence[str],
        leader_index: int = 0,
        formation_key: str | None = None,
        custom_offsets: Mapping[str, GridOffset | Sequence[int]] | None = None,
        name: str | None = None,
    ) -> str:
        """Merge placed agents into one party composite.

        Args:
            agent_ids: Agents to merge, at least two.
            leader_index: Index into agent_ids of the leader.
            formation_key: Default formation for later deployments.
            custom_offsets: Per-agent offset table (used by the "saved" key).
            name: Party name; falls back to a remembered name for this set of
                members, then to "<leader>'s Party".

        Returns:
            Id of the new composite.

        Raises:
            ConfigurationError: Fewer than two resolvable agents, a bad
                leader index, duplicates or an unknown formation key.
            OperationInProgressError: If any agent is already being merged.
            PersistenceWriteFailure: If the record cannot be stored; the
                composite is removed again and the agents are untouched.
        """
        ids = list(agent_ids)
        if len(ids) < 2:
            raise ConfigurationError("At least two agents are needed to form a party")
        if len(set(ids)) != len(ids):
            raise ConfigurationError(f"Duplicate agents in merge request: {ids}")
        if not 0 <= leader_index < len(ids):
            raise ConfigurationError(f"Leader index {leader_index} out of range for {len(ids)} agents")

        offsets_table = {k: _as_offset(v) for k, v in (custom_offsets or {}).items()}
        if formation_key is not None and not self._formation_known(formation_key, offsets_table):
            raise FormationNotFoundError(formation_key, available=self._available_formations())

        with self._exclusive(*ids):
            return self._merge(ids, ids[leader_index], formation_key, offsets_table, name)

    def _merge(
        self,
        ids: list[str],
        leader_id: str,
        formation_key: str | None,
        custom_offsets: dict[str, GridOffset],
        name: str | None,
    ) -> str:
        grid = self.spatial.grid_size

        agents: list[AgentRecord] = []
        for agent_id in ids:
            agent = self.directory.get(agent_id)
            if agent is not None and agent.is_composite:
                raise ConfigurationError(f"'{agent_id}' is a party and cannot join another party")
            if agent is None or not agent.is_placed:
                warning = MissingAgentData(agent_id)
                logger.warning("Skipping member in merge: %s", warning)
                self.notifier.warn(str(warning))
                continue
            agents.append(agent)

        leader = next((a for a in agents if a.agent_id == leader_id), None)
        if leader is None:
            raise ConfigurationError(f"Leader '{leader_id}' could not be resolved")
        if len(agents) < 2:
            raise ConfigurationError("At least two resolvable agents are needed to form a party")

        leader_center = leader.center(grid)
        members: list[MemberRecord] = []
        for agent in agents:
            is_leader = agent.agent_id == leader_id
            offset = (
                GridOffset()
                if is_leader
                else capture_offset(agent.center(grid), agent.footprint, leader_center, leader.footprint, grid)
            )
            members.append(
                MemberRecord(
                    agent_id=agent.agent_id,
                    name=agent.name,
                    offset=offset,
                    is_leader=is_leader,
                    footprint=agent.footprint,
                    light_snapshot=agent.light,
                    movement_snapshot=agent.movement,
                    image=agent.image,
                )
            )

        facing = natural_facing(m.offset for m in members if not m.is_leader)
        footprint = Footprint(
            width=max(a.footprint.width for a in agents),
            height=max(a.footprint.height for a in agents),
        )
        position = Point(
            x=leader_center.x - footprint.width * grid / 2,
            y=leader_center.y - footprint.height * grid / 2,
        )
        member_ids = [a.agent_id for a in agents]
        light = self.light_aggregator.aggregate(member_ids)
        movement = aggregate_movement(
            (a.movement for a in agents), default_speed=self.config.movement.default_speed
        )

        remembered = self.library.party_config_for(member_ids)
        party_name = name or (remembered.name if remembered else f"{leader.name or leader.agent_id}'s Party")
        image = remembered.image if remembered else leader.image

        spawn = AgentSpawn(
            name=party_name,
            footprint=footprint,
            position=position,
            is_composite=True,
            light=light,
            movement=movement,
            image=image,
        )
        composite_id = self.directory.create([spawn])[0]

        composite = PartyComposite(
            composite_id=composite_id,
            name=party_name,
            image=image,
            members=tuple(members),
            natural_facing=facing,
            last_facing=facing,
            movement=movement,
            light=light,
            footprint=footprint,
            anchor_footprint=leader.footprint,
            position=position,
            formation_key=formation_key,
            custom_offsets=custom_offsets,
        )
        try:
            self._persist(composite)
        except PersistenceWriteFailure:
            self.directory.destroy([composite_id])
            raise

        self.directory.destroy(member_ids)
        logger.info(
            "Merged %d agent(s) into %s (%s), facing %s",
            len(members),
            composite_id,
            party_name,
            facing.value,
        )
        self.notifier.info(f"{party_name} formed with {len(members)} members")
        return composite_id

    # ------------------------------------------------------------------
    # Deploy
    # ------------------------------------------------------------------

    def plan_deployment(
        self,
        composite_id: str,
        member_indices: Iterable[int] | None = None,
        formation_key: str | None = None,
        facing: Facing | str | None = None,
    ) -> DeploymentPlan:
        """Preview where members would land, without touching the scene."""
        composite = self.get_composite(composite_id)
        return self._plan(composite, member_indices, formation_key, facing)

    def _plan(
        self,
        composite: PartyComposite,
        member_indices: Iterable[int] | None,
        formation_key: str | None,
        facing: Facing | str | None,
    ) -> DeploymentPlan:
        total_members = len(composite.members)
        if member_indices is None:
            selected = list(range(total_members))
        else:
            selected = sorted(set(member_indices))
        if not selected:
            raise ConfigurationError("No members selected to deploy")
        out_of_range = [i for i in selected if not 0 <= i < total_members]
        if out_of_range:
            raise ConfigurationError(
                f"Member indices {out_of_range} out of range for {total_members} members"
            )

        remaining = [i for i in range(total_members) if i not in selected]
        escalated = len(remaining) == 1
        if escalated:
            selected = sorted(selected + remaining)
            remaining = []

        key = formation_key or composite.formation_key or self.config.party.default_formation
        resolve_offset = self._offset_resolver(composite, key)
        target = _as_facing(facing) if facing is not None else composite.last_facing
        steps = rotation_steps(composite.natural_facing, target)

        warnings: list[str] = []
        skipped: list[int] = []
        for i in selected:
            agent_id = composite.members[i].agent_id
            if self.directory.get(agent_id) is None:
                missing = MissingAgentData(agent_id)
                logger.warning("Skipping member in deploy: %s", missing)
                warnings.append(str(missing))
                skipped.append(i)
        selected = [i for i in selected if i not in skipped]

        grid = self.spatial.grid_size
        anchor = composite.anchor_cell(grid)
        batch_total = len(selected)
        batch = [
            (
                composite.members[i].agent_id,
                composite.members[i].footprint,
                resolve_offset(composite.members[i], position, batch_total),
            )
            for position, i in enumerate(selected)
        ]
        index_by_id = {composite.members[i].agent_id: i for i in selected}

        resolver = SpotResolver(
            self.spatial,
            self.occupancy,
            self.config.placement,
            exclude=[composite.composite_id, *index_by_id],
        )
        claims = BatchClaims()
        placements: list[MemberPlacement] = []
        for slot in placement_order(plan_slots(anchor, batch, steps)):
            resolution = resolver.resolve(slot.ideal_cell, slot.footprint, claims, agent_id=slot.agent_id)
            if resolution.exhausted:
                warnings.append(
                    str(PlacementExhausted(slot.agent_id, slot.ideal_cell.as_tuple(), resolution.radius))
                )
            placements.append(
                MemberPlacement(
                    member_index=index_by_id[slot.agent_id],
                    agent_id=slot.agent_id,
                    formation_offset=slot.formation_offset,
                    rotated_offset=slot.rotated_offset,
                    ideal_cell=slot.ideal_cell,
                    cell=resolution.cell,
                    position=resolution.cell.to_point(grid),
                    radius=resolution.radius,
                    exhausted=resolution.exhausted,
                )
            )

        placements.sort(key=lambda p: p.member_index)
        return DeploymentPlan(
            composite_id=composite.composite_id,
            formation_key=key,
            facing=target,
            rotation_steps=steps,
            anchor=anchor,
            placements=tuple(placements),
            remaining_indices=tuple(remaining),
            skipped_indices=tuple(skipped),
            escalated=escalated,
            warnings=tuple(warnings),
        )

    def deploy_all(
        self,
        composite_id: str,
        formation_key: str | None = None,
        facing: Facing | str | None = None,
    ) -> list[str]:
        """Deploy every member and dissolve the composite.

        Returns:
            Ids of the placed member agents, in member order.
        """
        return self._deploy(composite_id, None, formation_key, facing)

    def deploy_subset(
        self,
        composite_id: str,
        member_indices: Iterable[int],
        formation_key: str | None = None,
        facing: Facing | str | None = None,
    ) -> list[str]:
        """Deploy selected members; the rest stay merged.

        A selection that would leave one member behind deploys that member
        too and dissolves the composite.
        """
        return self._deploy(composite_id, list(member_indices), formation_key, facing)

    def _deploy(
        self,
        composite_id: str,
        member_indices: list[int] | None,
        formation_key: str | None,
        facing: Facing | str | None,
    ) -> list[str]:
        with self._exclusive(composite_id):
            composite = self.get_composite(composite_id)
            plan = self._plan(composite, member_indices, formation_key, facing)
            return self._execute(composite, plan)

    def _execute(self, composite: PartyComposite, plan: DeploymentPlan) -> list[str]:
        spawns = []
        for placement in plan.placements:
            member = composite.members[placement.member_index]
            spawns.append(
                AgentSpawn(
                    source_agent_id=member.agent_id,
                    name=member.name,
                    footprint=member.footprint,
                    position=placement.position,
                    light=member.light_snapshot,
                    movement=member.movement_snapshot,
                    image=member.image,
                )
            )

        try:
            created = self.directory.create(spawns) if spawns else []
        except Exception:
            logger.exception("Deploying %s failed; party left intact", composite.composite_id)
            self.notifier.error(f"Could not deploy {composite.name}; the party was left intact")
            raise

        for warning in plan.warnings:
            self.notifier.warn(warning)

        if plan.is_full_deploy:
            self.scheduler.cancel(composite.composite_id)
            self.directory.destroy([composite.composite_id])
            self.store.delete(composite.composite_id)
            logger.info(
                "Deployed %s in full (%s, facing %s)",
                composite.composite_id,
                plan.formation_key,
                plan.facing.value,
            )
            self.notifier.info(f"{composite.name} deployed")
            return created

        remaining_members = tuple(composite.members[i] for i in plan.remaining_indices)
        remaining_ids = [m.agent_id for m in remaining_members]
        updated = composite.model_copy(
            update={
                "members": remaining_members,
                "last_facing": plan.facing,
                "light": self.light_aggregator.aggregate(remaining_ids),
                "movement": self.movement_aggregator.aggregate(remaining_ids),
                "custom_offsets": {
                    k: v for k, v in composite.custom_offsets.items() if k in remaining_ids
                },
            }
        )
        try:
            self._persist(updated)
        except PersistenceWriteFailure:
            self.directory.destroy(created)
            logger.exception("Rolled back partial deploy of %s", composite.composite_id)
            self.notifier.error(f"Could not update {composite.name}; deployment rolled back")
            raise

        logger.info(
            "Deployed %d member(s) from %s, %d remain",
            len(created),
            composite.composite_id,
            len(remaining_members),
        )
        self.notifier.info(f"{len(created)} member(s) left {composite.name}")
        return created

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def recompute_lighting(self, composite_id: str) -> LightProfile:
        """Current party light from live member data (not persisted)."""
        composite = self.get_composite(composite_id)
        return self.light_aggregator.aggregate(composite.member_ids)

    def recompute_movement(self, agent_ids: Iterable[str]) -> MovementProfile:
        return self.movement_aggregator.aggregate(agent_ids)

    def refresh_composite(self, composite_id: str) -> PartyComposite | None:
        """Re-aggregate light and movement and store them.

        Returns:
            The refreshed composite, or None if it no longer exists or could
            not be stored (the stored aggregate is then left unchanged).
        """
        data = self.store.load(composite_id)
        if data is None:
            logger.debug("Composite %s is gone, skipping refresh", composite_id)
            return None

        composite = PartyComposite.from_record(data)
        refreshed = composite.model_copy(
            update={
                "light": self.light_aggregator.aggregate(composite.member_ids),
                "movement": self.movement_aggregator.aggregate(composite.member_ids),
            }
        )
        try:
            self._persist(refreshed)
        except PersistenceWriteFailure as e:
            logger.warning("%s", e)
            self.notifier.warn(str(e))
            return None
        return refreshed

    def _on_data_ready(self, agent_id: str) -> None:
        for composite_id in self.store.list_ids():
            data = self.store.load(composite_id)
            if data is None:
                continue
            members = data.get("members", [])
            if any(m.get("agent_id") == agent_id for m in members):
                self.scheduler.schedule(composite_id)

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    def add_member(self, composite_id: str, agent_id: str) -> PartyComposite:
        """Absorb a nearby placed agent into an existing party.

        Raises:
            ConfigurationError: Already a member, a party itself, unresolvable,
                or too far away.
        """
        with self._exclusive(composite_id, agent_id):
            composite = self.get_composite(composite_id)
            if agent_id == composite_id:
                raise ConfigurationError(f"{composite.name} cannot join itself")
            if composite.member(agent_id) is not None:
                raise ConfigurationError(f"'{agent_id}' is already in {composite.name}")

            agent = self.directory.get(agent_id)
            if agent is None or not agent.is_placed:
                raise ConfigurationError(str(MissingAgentData(agent_id)))
            if agent.is_composite:
                raise ConfigurationError(f"'{agent_id}' is a party and cannot join {composite.name}")

            grid = self.spatial.grid_size
            party_center = composite.center(grid)
            reach = self.config.party.nearby_distance_multiplier * grid
            distance = agent.center(grid).distance_to(party_center)
            if distance > reach:
                raise ConfigurationError(
                    f"'{agent_id}' is too far from {composite.name} ({distance:.0f} > {reach:.0f})"
                )

            member = MemberRecord(
                agent_id=agent.agent_id,
                name=agent.name,
                offset=capture_offset(
                    agent.center(grid), agent.footprint, party_center, composite.anchor_footprint, grid
                ),
                footprint=agent.footprint,
                light_snapshot=agent.light,
                movement_snapshot=agent.movement,
                image=agent.image,
            )
            member_ids = [*composite.member_ids, agent_id]
            updated = composite.model_copy(
                update={
                    "members": (*composite.members, member),
                    "light": self.light_aggregator.aggregate(member_ids),
                    "movement": self.movement_aggregator.aggregate(member_ids),
                }
            )
            self._persist(updated)
            self.directory.destroy([agent_id])

        self.notifier.info(f"{agent.name or agent_id} joined {composite.name}")
        return updated

    def remove_member(self, composite_id: str, agent_id: str) -> list[str]:
        """Step one member out at its own slot, facing the party's last facing."""
        composite = self.get_composite(composite_id)
        index = composite.index_of(agent_id)
        if index is None:
            raise ConfigurationError(f"'{agent_id}' is not in {composite.name}")
        return self.deploy_subset(
            composite_id,
            [index],
            formation_key=CUSTOM_FORMATION_KEY,
            facing=composite.last_facing,
        )

    def scout_ahead(self, composite_id: str, agent_id: str) -> str:
        """Place a member next to the party without removing it from the party."""
        with self._exclusive(composite_id):
            composite = self.get_composite(composite_id)
            member = composite.member(agent_id)
            if member is None:
                raise ConfigurationError(f"'{agent_id}' is not in {composite.name}")

            grid = self.spatial.grid_size
            resolver = SpotResolver(self.spatial, self.occupancy, self.config.placement, exclude=[agent_id])
            resolution = resolver.find_valid_spot(
                composite.anchor_cell(grid), member.footprint, BatchClaims(), agent_id=agent_id
            )
            created = self.directory.create(
                [
                    AgentSpawn(
                        source_agent_id=member.agent_id,
                        name=member.name,
                        footprint=member.footprint,
                        position=resolution.cell.to_point(grid),
                        light=member.light_snapshot,
                        movement=member.movement_snapshot,
                        image=member.image,
                    )
                ]
            )

        self.notifier.info(f"{member.name or agent_id} scouts ahead!")
        return created[0]

    def save_formation(self, composite_id: str, name: str, description: str = "") -> None:
        """Store the party's current offsets as a named formation."""
        composite = self.get_composite(composite_id)
        self.library.save_formation(
            name, {m.agent_id: m.offset for m in composite.members}, description=description
        )

    def remember_party(self, composite_id: str) -> None:
        """Remember this party's name and image for the same set of members."""
        composite = self.get_composite(composite_id)
        self.library.remember_party(composite.member_ids, composite.name, composite.image)

    # ------------------------------------------------------------------
    # Bulk and follow
    # ------------------------------------------------------------------

    def deploy_everything(self, facing: Facing | str | None = None) -> dict[str, list[str]]:
        """Deploy every stored party; parties that cannot deploy are reported and skipped."""
        results: dict[str, list[str]] = {}
        for composite_id in self.store.list_ids():
            try:
                results[composite_id] = self.deploy_all(composite_id, facing=facing)
            except (ConfigurationError, OperationInProgressError) as e:
                logger.warning("Could not deploy %s: %s", composite_id, e)
                self.notifier.warn(f"Could not deploy {composite_id}: {e}")
            except Exception as e:
                # One broken party must not keep the others merged
                logger.exception("Deploying %s failed, continuing with the rest", composite_id)
                self.notifier.error(f"Could not deploy {composite_id}: {e}")
        return results

    def on_combat_start(self) -> dict[str, list[str]]:
        if not self.config.party.auto_deploy_on_combat:
            return {}
        logger.info("Combat started, deploying all parties")
        return self.deploy_everything()

    def toggle_follow_leader(self, agent_ids: Sequence[str]) -> bool:
        """Engage follow-the-leader with agent_ids[0] leading, or disengage.

        Returns:
            True if the mode is now engaged.
        """
        if self.follow.active:
            self.follow.disengage()
            self.notifier.info("Follow-the-Leader mode disabled.")
            return False
        if len(agent_ids) < 2:
            raise ConfigurationError("Select at least 2 agents to enable Follow-the-Leader mode")
        self.follow.engage(agent_ids[0], agent_ids[1:])
        self.notifier.info(f"Follow-the-Leader mode enabled. {agent_ids[0]} is the leader.")
        return True
