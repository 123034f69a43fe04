"""
Game constants - all tuning numbers in one place.
NO UI DEPENDENCIES.

Distances are in pixels, velocities in pixels per tick. Timers are in
seconds unless the name ends in _TICKS.
"""

# =============================================================================
# TIMING
# =============================================================================
TICK_RATE = 60                # ticks per second
TICK_DT = 1.0 / TICK_RATE     # seconds per tick
MAX_CATCHUP_TICKS = 5         # most ticks one frame may run

# =============================================================================
# WORLD
# =============================================================================
INDESTRUCTIBLE = 999          # block health marking ground and walls
TOP_WALL_HEIGHT = 40          # monsters never go above this line
EDGE_MARGIN = 10              # clamp margin on the other three sides

# =============================================================================
# SPAWNING
# =============================================================================
INITIAL_SPAWN_DELAY = 2.0
SPAWN_BASE_INTERVAL = 30      # shrinks by one every SPAWN_RAMP_SECONDS
SPAWN_RAMP_SECONDS = 20
SPAWN_MIN_INTERVAL = 10
SPAWN_JITTER_LOW = 0.7        # interval multiplier range [0.7, 1.3)
SPAWN_JITTER_SPAN = 0.6
SPAWN_EDGE_INSET = 80
SPAWN_TOP = 60

# =============================================================================
# MONSTERS
# =============================================================================
MONSTER_HP = 20
MONSTER_MAX_VX = 2.0
MONSTER_MAX_VY = 1.2
MONSTER_ACCEL_X = 0.05
MONSTER_ACCEL_Y = 0.02
WANDER_ACCEL_X = 0.02
WANDER_ACCEL_Y = 0.01
JITTER_CHANCE = 0.01
JITTER_IMPULSE = 0.6
STONE_CONTACT_MARGIN = 10
STONE_CONTACT_DAMAGE = 0.12
RESONATOR_CONTACT_RANGE = 28
RESONATOR_CONTACT_DAMAGE = 0.15
DIG_PROBE = 8
DIG_THRESHOLD_TICKS = 45
DIG_DAMAGE = 8

# =============================================================================
# RESONATORS & EVERSTONES
# =============================================================================
RESONATOR_HP = 120
RESONATOR_MAX_HP = 150
PRODUCE_COOLDOWN = 12.0
EVERSTONE_RADIUS = 26
EVERSTONE_HP = 100
EVERSTONE_OFFSET_Y = 40       # stones appear above their resonator

# =============================================================================
# DEFENSES
# =============================================================================
TURRET_RATE = 0.25            # shots per second
TURRET_RANGE = 300
TURRET_DAMAGE = 8

TRAP_RADIUS = 28
TRAP_REACH_MARGIN = 8
TRAP_STUN_TICKS = 90
TRAP_COOLDOWN_TICKS = 240

BOMB_FUSE_TICKS = 60
BOMB_MONSTER_RADIUS = 90
BOMB_MONSTER_DAMAGE = 30
BOMB_STRUCTURE_RADIUS = 120
BOMB_BLOCK_DAMAGE = 80
BOMB_RESONATOR_DAMAGE = 30
BOMB_EVERSTONE_DAMAGE = 40

# =============================================================================
# TOOLS & REPAIR
# =============================================================================
REPAIR_RADIUS = 80
BLOCK_REPAIR_AMOUNT = 35
BLOCK_MAX_HEALTH = 220
RESONATOR_REPAIR_AMOUNT = 25

BUILDER_SIZE = (60, 36)
BUILDER_HEALTH = 120
BARRIER_SIZE = (80, 20)
BARRIER_HEALTH = 180
CONVEYOR_SIZE = (120, 24)
REPAIR_STATION_SIZE = 32
REPAIR_STATION_HEALTH = 160

DEGENERATE_BLOCK_SIZE = 4     # blocks this thin or thinner get pruned
PRUNE_INTERVAL = 3.0          # wall-clock seconds between prunes
