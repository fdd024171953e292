#!/usr/bin/env python3
"""
Minuscule Poset Explorer (command line)

Subcommands:
  list                      supported types, ranks and minuscule indices
  info   TYPE N K           poset summary and representation model
  verify TYPE N K           exhaustive check of the phi bijection
  orbit  TYPE N K           orbit of an ideal with homomesy/CSP comparison
  csp    TYPE N K           rank-generating polynomial at roots of unity

Usage:
  python3 -m minuscule.cli verify E 6 1 --progress
  python3 -m minuscule.cli orbit A 4 2 --word "s2 s1 s3 s4"
"""

import argparse
import logging
import sys
import time

from .actions import (CoxeterWord, FonDerFlaass, count_action_fixed_points,
                      orbit_from_mask, parse_coxeter_word, summarize_orbit)
from .cartan import minuscule_weights, supported_ranks, supported_types
from .csp import (csp_fixed_point_evaluation_from_rank_generating,
                  csp_fixed_point_evaluation_type_a, homomesy_predictions)
from .errors import ConfigurationError
from .ideals import mask_indices, require_ideal
from .phi import phi
from .poset import build_minuscule_poset
from .verification import VerificationOptions, enumerate_ideals, verify_exhaustively


def _fmt(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"


def _status(ok) -> str:
    if ok is None:
        return "skipped"
    return "PASS" if ok else "FAIL"


def cmd_list(args) -> int:
    print("=" * 60)
    print("SUPPORTED MINUSCULE CONFIGURATIONS")
    print("=" * 60)
    for lie_type in supported_types():
        for n in supported_ranks(lie_type):
            print(f"  {lie_type}_{n}: k in {_fmt(minuscule_weights(lie_type, n))}")
    return 0


def cmd_info(args) -> int:
    poset = build_minuscule_poset(args.type, args.n, args.k)
    print(poset.summary())
    for note in poset.representation.notes:
        print(f"  note: {note}")
    print("\nNodes:")
    for node in poset.nodes:
        print(f"  {node.index:>3} {node.display:>7}  label={node.label}  rank={node.rank}  "
              f"preds={list(node.preds)}  succs={list(node.succs)}")
    return 0


def cmd_verify(args) -> int:
    poset = build_minuscule_poset(args.type, args.n, args.k)
    options = VerificationOptions(enable_phi_extension_check=args.phi_check,
                                  max_samples_per_ideal=args.samples,
                                  progress=args.progress)
    start_time = time.time()
    report = verify_exhaustively(poset, options)

    print("=" * 60)
    print(f"VERIFICATION: {poset.name}")
    print("=" * 60)
    print(f"Ideals |J(P)|:          {report.ideals_count} (expected {report.expected_count})")
    print(f"Distinct weights:       {report.distinct_weights}")
    print(f"Count = dimension:      {_status(report.count_matches_dimension)}")
    print(f"phi bijective:          {_status(report.bijective)}")
    print(f"phi equivariant:        {_status(report.equivariant)}")
    print(f"Weights in orbit:       {_status(report.in_orbit)}")
    labels = report.label_structure
    print(f"Cover property:         {_status(labels.cover_property_pass)}")
    print(f"Toggle order-indep.:    {_status(labels.toggle_order_independence_pass)}")
    ext = report.phi_extension_independence
    print(f"phi extension-indep.:   {_status(ext.passed)}"
          + (f" ({ext.samples_checked} samples)" if ext.ran else f" ({ext.skipped_reason})"))

    for witness in (report.duplicate_weight, report.equivariance_failure,
                    report.out_of_orbit_weight, labels.cover_counterexample,
                    labels.toggle_counterexample, ext.counterexample):
        if witness is not None:
            print(f"  counterexample: {witness}")

    print(f"\nOverall: {_status(report.all_checks_pass)}")
    print(f"Total time: {time.time() - start_time:.2f}s")
    return 0 if report.all_checks_pass else 1


def cmd_orbit(args) -> int:
    poset = build_minuscule_poset(args.type, args.n, args.k)
    require_ideal(args.mask, poset)

    action = CoxeterWord(parse_coxeter_word(args.word, poset.n)) if args.word else FonDerFlaass()
    ideals = enumerate_ideals(poset)
    orbit = orbit_from_mask(args.mask, action, poset)
    observed = summarize_orbit(orbit.masks, poset)
    predicted = homomesy_predictions(poset)
    fixed = count_action_fixed_points(poset, action, ideals)
    if poset.lie_type == "A":
        csp_fixed = csp_fixed_point_evaluation_type_a(poset, 1).fixed_points
    else:
        csp_fixed = csp_fixed_point_evaluation_from_rank_generating(poset, 1, ideals).fixed_points

    print("=" * 60)
    print(f"ORBIT: {poset.name} under {action.describe()}")
    print("=" * 60)
    for i, mask in enumerate(orbit.masks):
        print(f"  {i:>3}: {_fmt(mask_indices(mask)):<40} phi = {phi(mask, poset).weight}")
    print(f"\nOrbit length: {orbit.orbit_length} (h = {poset.coxeter_number})")
    print(f"{'Statistic':<22} {'Observed':>14} {'Predicted':>14}")
    print("-" * 52)
    print(f"{'avg |I|':<22} {str(observed.avg_size):>14} {str(predicted.avg_size):>14}")
    for label, (obs, pred) in enumerate(zip(observed.avg_label_counts,
                                            predicted.avg_label_counts), start=1):
        print(f"{'avg #label ' + str(label):<22} {str(obs):>14} {str(pred):>14}")
    if isinstance(action, FonDerFlaass):
        print(f"{'avg |max(I)|':<22} {str(observed.avg_antichain_size):>14} "
              f"{str(predicted.avg_antichain_size):>14}")
    print(f"{'global fixed points':<22} {fixed.fixed_points:>14} {csp_fixed:>14}")
    return 0


def cmd_csp(args) -> int:
    poset = build_minuscule_poset(args.type, args.n, args.k)
    evaluation = csp_fixed_point_evaluation_from_rank_generating(poset, args.power)
    value = evaluation.evaluation

    print("=" * 60)
    print(f"CYCLIC SIEVING: {poset.name}, power {evaluation.power} mod h = {evaluation.order}")
    print("=" * 60)
    print(f"M_P(q) coefficients: {_fmt(evaluation.coefficients)}")
    print(f"root order r = {value.root_order}, gcd = {value.gcd_value}")
    print(f"M_P(zeta) = {value.real:.9f} + {value.imag:.9f}i "
          f"(stable: {value.numeric_stable})")
    print(f"Predicted fixed points: {evaluation.fixed_points}")
    if poset.lie_type == "A":
        closed = csp_fixed_point_evaluation_type_a(poset, args.power)
        print(f"Type A closed form:     {closed.fixed_points} "
              f"(d = {closed.gcd_value}, r = {closed.root_order})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Minuscule posets, toggle actions and the weight bijection")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase logging verbosity (-v info, -vv debug)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List supported configurations").set_defaults(func=cmd_list)

    def with_triple(name, func, help_text):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("type", help="Lie type (A, D or E)")
        p.add_argument("n", type=int, help="Rank")
        p.add_argument("k", type=int, help="Minuscule weight index")
        p.set_defaults(func=func)
        return p

    with_triple("info", cmd_info, "Show the poset")

    p = with_triple("verify", cmd_verify, "Exhaustively verify the phi bijection")
    p.add_argument("--phi-check", dest="phi_check", action="store_true", default=None,
                   help="Force the phi extension-independence check")
    p.add_argument("--no-phi-check", dest="phi_check", action="store_false", default=None,
                   help="Skip the phi extension-independence check")
    p.add_argument("--samples", type=int, default=8,
                   help="Linear extensions sampled per ideal (default 8)")
    p.add_argument("--progress", action="store_true", help="Show progress bars")

    p = with_triple("orbit", cmd_orbit, "Orbit of an ideal under an action")
    p.add_argument("--mask", type=int, default=0, help="Starting ideal mask (default 0)")
    p.add_argument("--word", type=str, default=None,
                   help="Coxeter word such as 's2 s1 s3'; default is Fon-Der-Flaass")

    p = with_triple("csp", cmd_csp, "Cyclic sieving prediction")
    p.add_argument("--power", type=int, default=1, help="Power of the action (default 1)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        return args.func(args)
    except ConfigurationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
