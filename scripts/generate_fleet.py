"""Random fleet generator for the platform assigner."""
import argparse, random, json
from typing import List, Dict


def build_trains(n: int, window: int, min_dwell: int, max_dwell: int) -> List[Dict]:
    trains: List[Dict] = []
    for i in range(n):
        dwell = random.randint(min_dwell, max_dwell)
        arr = random.randint(0, max(0, window - dwell))
        trains.append({
            "id": f"T{i+1}",
            "name": f"Service {100 + i}",
            "arrival": arr,
            "departure": arr + dwell,
        })
    return trains


def main():
    p = argparse.ArgumentParser()
    p.add_argument('-Trains', type=int, default=50)
    p.add_argument('-Window', type=int, default=240)
    p.add_argument('-MinDwell', type=int, default=15)
    p.add_argument('-MaxDwell', type=int, default=45)
    p.add_argument('-Seed', type=int, default=42)
    p.add_argument('-Out', type=str, default='fleet.json')
    a = p.parse_args()

    random.seed(a.Seed)
    trains = build_trains(a.Trains, a.Window, a.MinDwell, a.MaxDwell)
    with open(a.Out, 'w') as f:
        json.dump({"trains": trains}, f, indent=2)
    print(f"Wrote {len(trains)} trains -> {a.Out}")


if __name__ == '__main__':
    main()
