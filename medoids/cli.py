# medoids/cli.py
"""
Command line entry point: cluster one or more point files.

Usage:
    medoids points.csv more_points.xlsx -k 3 --seed 42 --output clusters.csv
"""
import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .domain.errors import ClusteringError
from .logging_config import get_logger, log_section, setup_logging
from .services.clustering_service import ClusteringSession
from .services.export_service import ExportService
from .services.ingestion_service import IngestionService

logger = get_logger('cli')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Cluster 2D points with k-medoids (PAM)')
    parser.add_argument('files', nargs='+', help='CSV or Excel files with x/y columns')
    parser.add_argument('-k', type=int, default=None, help='Number of medoids (default from config)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for medoid seeding')
    parser.add_argument('--max-iterations', type=int, default=None,
                        help='Fail if not converged after this many iterations')
    parser.add_argument('--config', default=None, help='Optional JSON config file')
    parser.add_argument('--output', default=None, help='Write per-point assignments to this CSV file')
    parser.add_argument('--dev-mode', action='store_true', help='Enable developer mode logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.dev_mode:
        os.environ['MEDOIDS_DEV_MODE'] = '1'
    setup_logging()

    try:
        config = load_config(args.config)
        if args.seed is not None:
            config.clustering.random_seed = args.seed
        if args.max_iterations is not None:
            config.clustering.max_iterations = args.max_iterations
        k = args.k if args.k is not None else config.clustering.default_k
        config.clustering.check_cluster_count(k)

        ingestion = IngestionService(config)
        export = ExportService(config)
        session = ClusteringSession(config, session_id='cli')

        for file_name in args.files:
            path = Path(file_name)
            session.add_dataset(ingestion.load_dataset(path.read_bytes(), path.name))
        report = session.run(k)
    except (ClusteringError, ValueError, OSError) as e:
        logger.error(f"FAILED: {e}")
        return 1

    log_section(logger, f"{len(report.medoids)} clusters after {report.iterations} iterations")
    summary = export.build_summary_dataframe(session.current_clusters())
    print(summary.to_string())
    print(f"\nTotal cost: {report.cost}")

    if args.output:
        results = export.build_results_dataframe(session.current_clusters())
        Path(args.output).write_bytes(export.export_to_csv(results))
        logger.info(f"Assignments written to {args.output}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
