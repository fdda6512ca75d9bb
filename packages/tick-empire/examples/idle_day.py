"""An idle day -- one starter dataset, a hire, an hour of play, a night away.

Demonstrates:
- Building a GameState around a starter dataset
- Driving ticks through a Session with a seeded engine
- Hiring staff between ticks
- Offline catch-up on resume
- Exporting the save blob

Run: python -m examples.idle_day
"""

from tick_empire import (
    Dataset,
    GameState,
    Metrics,
    Session,
    Staff,
    StaffEffects,
    TickEngine,
    hire_staff,
    unlock_dataset,
)


def report(label: str, session: Session) -> None:
    state = session.state
    print(
        f"  {label:<14} DC={state.currency:10.2f}  rate={state.total_rate():6.3f}/s"
        f"  SLA={state.global_sla():6.2f}  incidents={len(state.incidents)}"
    )
    for ds in state.datasets:
        print(f"    {ds.name:<18} {ds.status:<8} sla={ds.sla:6.2f}")


def main() -> None:
    print("=== Idle Day ===\n")

    start = 1_700_000_000.0
    starter = Dataset.create("orders", "Orders Feed", 60.0, volume=200)
    state = GameState.new(starter, now=start)
    session = Session(state, TickEngine(seed=2024))

    now = start
    for _ in range(300):
        now += 1
        session.step(now)
    report("5 minutes", session)

    steward = Staff(
        id="steward",
        name="Data Steward",
        role="data-steward",
        cost=100,
        effects=StaffEffects(metric_bonus=Metrics(0.1, 0.1, 0.05), dc_bonus=1.1),
    )
    hire_staff(state, steward)
    unlock_dataset(state, Dataset.create("crm", "CRM Export", 180.0, risk="medium"))

    for _ in range(3600):
        now += 1
        session.step(now)
    report("1 hour later", session)

    result = session.resume(now + 8 * 3600)
    if result is not None:
        print(f"\n  Away 8h: +{result.earned} DC over {result.ticks_simulated} ticks")
    report("after resume", session)

    stats = session.stats
    print(
        f"\n  {stats.total_ticks} ticks, avg {stats.average_ms:.3f}ms,"
        f" max {stats.max_ms:.3f}ms, slow {stats.slow_ticks}"
    )
    print(f"  save size: {len(state.export_save())} bytes")


if __name__ == "__main__":
    main()
