# demo_driver.py
"""
Minimal drivers:
1) benchmark: 4 constant sensors, 3 actuators, 4 reflexes; time blocks of cycles.
2) teach: labelled random patterns on the sensory plane, one teaching sensor per label bound
   with add_reflex_sensor (excites its actuator, inhibits the rest). Learning runs with
   run_cycle; evaluation presents each pattern with teaching sensors silent, using
   run_static_cycle, and picks the actuator with the largest mean value.

Usage:
    python demo_driver.py benchmark --cycles 3000
    python demo_driver.py teach --epochs 3
"""
import argparse
import logging
import time
from dataclasses import replace

import numpy as np
from tqdm.auto import tqdm

from charge import SynapseType
from config import CFG
from encephalon import Encephalon
from geometry import EcpBox
from hebbian import basic_weight_modifier
from inputs import build_schedule, frame, make_patterns
from interfaces import BasicActuator, BasicSensor, ConstantSensor
from reflex import Reflex, teaching_reflexes

logger = logging.getLogger(__name__)


def benchmark(cfg=CFG, n_cycles=None):
    n_cycles = cfg.benchmark_cycles if n_cycles is None else n_cycles
    sensors = [ConstantSensor(name, 0.5) for name in ("1", "2", "3", "4")]
    actuators = [BasicActuator(name) for name in ("act1", "act2", "act3")]
    reflexes = [
        Reflex("1", "act1", SynapseType.EXCITATORY, cfg.reflex_weight),
        Reflex("2", "act1", SynapseType.INHIBITORY, cfg.reflex_weight),
        Reflex("1", "act2", SynapseType.EXCITATORY, cfg.reflex_weight),
        Reflex("3", "act3", SynapseType.INHIBITORY, cfg.reflex_weight),
    ]
    geometry = EcpBox(cfg.num_plastic, len(actuators), len(sensors), cfg.nearby_count)
    ecp = Encephalon.from_config(geometry, sensors, actuators, reflexes, cfg)

    timings = []
    t_block = time.perf_counter()
    for i in range(n_cycles):
        ecp.run_cycle()
        if (i + 1) % cfg.report_every == 0:
            elapsed = time.perf_counter() - t_block
            timings.append(elapsed)
            print(f"Cycle: {i + 1}, Elapsed time: {elapsed:.3f}s")
            t_block = time.perf_counter()
    return dict(timings=timings, actuator_values=ecp.actuator_values())


def _present(ecp, sensors, pattern, cycles, noise_level, rng, static):
    step = ecp.run_static_cycle if static else ecp.run_cycle
    totals = np.zeros(len(ecp.actuator_interfaces))
    for _ in range(cycles):
        for sensor, value in zip(sensors, frame(pattern, noise_level, rng)):
            sensor.set_measure(value)
        step()
        totals += np.array(list(ecp.actuator_values().values()))
    return totals / max(cycles, 1)


def teach(cfg=CFG, progress=True):
    rng = np.random.default_rng(cfg.seed + 2)
    labels = [str(i) for i in range(cfg.num_actuator)]

    sensors = [BasicSensor(f"s{i}") for i in range(cfg.num_sensory)]
    actuators = [BasicActuator(label) for label in labels]
    geometry = EcpBox.from_config(cfg)
    ecp = Encephalon.from_config(geometry, sensors, actuators, [], cfg)

    tutors = {}
    for i, label in enumerate(labels):
        tutor = BasicSensor(f"teach:{label}")
        ecp.add_reflex_sensor(tutor, i,
                              teaching_reflexes(tutor.name, labels, label, cfg.reflex_weight),
                              basic_weight_modifier)
        tutors[label] = tutor

    patterns = make_patterns(cfg.num_actuator, cfg.num_sensory, cfg.on_fraction, rng)
    schedule = build_schedule(labels, cfg.pattern_cycles, cfg.rest_cycles, cfg.epochs, rng)
    blank = np.zeros(cfg.num_sensory)
    logger.info("teaching %d patterns over %d segments", len(patterns), len(schedule))

    W0 = ecp.weight_matrix("plastic")
    for seg in tqdm(schedule, desc="Teaching", unit="segment", leave=False, disable=not progress):
        for label, tutor in tutors.items():
            tutor.set_measure(1.0 if label == seg["label"] else 0.0)
        if seg["kind"] == "pattern":
            ecp.clear()
            _present(ecp, sensors, patterns[seg["label"]], seg["cycles"],
                     cfg.noise_level, rng, static=False)
        else:
            _present(ecp, sensors, blank, seg["cycles"], cfg.noise_level, rng, static=False)
    dW = ecp.weight_matrix("plastic") - W0

    for tutor in tutors.values():
        tutor.set_measure(0.0)
    predictions = {}
    for label in labels:
        ecp.clear()
        scores = _present(ecp, sensors, patterns[label], cfg.pattern_cycles,
                          cfg.noise_level, rng, static=True)
        predictions[label] = labels[int(np.argmax(scores))]

    accuracy = float(np.mean([predictions[label] == label for label in labels]))
    print("Mean Δw plastic:", float(dW.sum()) / max(dW.nnz, 1))
    print("Predictions:", predictions)
    print(f"Accuracy: {accuracy:.2f}")
    return dict(predictions=predictions, accuracy=accuracy)


def main(argv=None):
    ap = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    ap.add_argument("--seed", type=int, default=CFG.seed)
    ap.add_argument("--log-level", default=CFG.log_level)
    sub = ap.add_subparsers(dest="command", required=True)
    b = sub.add_parser("benchmark")
    b.add_argument("--cycles", type=int, default=CFG.benchmark_cycles)
    t = sub.add_parser("teach")
    t.add_argument("--epochs", type=int, default=CFG.epochs)
    args = ap.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(name)s %(levelname)s %(message)s")
    if args.command == "benchmark":
        return benchmark(replace(CFG, seed=args.seed), args.cycles)
    return teach(replace(CFG, seed=args.seed, epochs=args.epochs))


if __name__ == "__main__":
    main()
