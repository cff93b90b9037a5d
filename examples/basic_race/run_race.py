#!/usr/bin/env python3
"""
Basic Race Example

This example demonstrates how to:
1. Configure a short race
2. Run it with a live track display
3. Inspect the outcome and each horse's final state

Run with: python run_race.py
"""

from horserace import RaceConfig, RaceController


def main():
    print("=" * 60)
    print("HorseRace Basic Race Example")
    print("=" * 60)

    # Step 1: A quicker race than the defaults, reproducible via the seed
    config = RaceConfig(seed=42).fast()
    config.settle_period_s = 1.0

    print("\n1. Setting up the field...")
    controller = RaceController(5, config=config)
    print(f"   Horses: {len(controller.roster)}")
    print(f"   Finish line: {config.finish_line}")

    # Step 2: Run the race
    print("\n2. Racing...\n")
    outcome = controller.start_race()

    # Step 3: Outcome
    print("\n3. Outcome:")
    print(f"   Status: {outcome.status.value}")
    print(f"   Winner: Horse {outcome.finish_order[0]}")
    print(f"   Duration: {outcome.duration_s:.2f} seconds")
    print(f"   Monitor exit: {outcome.monitor_exit.value if outcome.monitor_exit else 'n/a'}")

    print("\n4. Horse states:")
    for horse in controller.roster:
        state = horse.get_state()
        print(f"   Horse {state['horse_id']}: {state['steps']} strides, "
              f"position {state['position']}")

    print("\n" + "=" * 60)
    print("Race complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
