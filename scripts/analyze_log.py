#!/usr/bin/env python3
"""
Script CLI para minerar e analisar um event log.

Uso:
    python scripts/analyze_log.py --log data/orders.csv --strategy performance
"""
import sys
import json
import argparse
from pathlib import Path

from bpmn_analytics.analyzer import ProcessAnalyzer
from bpmn_analytics.config import AnalysisConfig, load_config
from bpmn_analytics.exceptions import BPMNAnalyticsError
from bpmn_analytics.log_config import configure_logging
from bpmn_analytics.parsers import LogReader
from bpmn_analytics.recommendations import Strategy


def main():
    parser = argparse.ArgumentParser(
        description="Descobre o processo de um event log e recomenda otimizações",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
            Exemplos:
                # Análise completa com a estratégia padrão (auto)
                python scripts/analyze_log.py --log data/orders.csv

                # Apenas regras de compliance, saída JSON
                python scripts/analyze_log.py --log session.har --strategy compliance --json
        """
    )

    parser.add_argument(
        "--log",
        required=True,
        help="Arquivo de log (.csv, .json ou .har)"
    )
    parser.add_argument(
        "--strategy",
        default=Strategy.AUTO.value,
        choices=[s.value for s in Strategy],
        help="Estratégia de recomendação (padrão: auto)"
    )
    parser.add_argument(
        "--config",
        help="Arquivo YAML com limiares e pesos da análise"
    )
    parser.add_argument(
        "--lenient",
        action='store_true',
        help="Ignora entradas inválidas do log em vez de abortar"
    )
    parser.add_argument(
        "--json",
        action='store_true',
        help="Imprime o resultado completo em JSON"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Nível do log estruturado em stderr (padrão: WARNING)"
    )

    args = parser.parse_args()
    configure_logging(args.log_level, json_output=args.json)

    log_path = Path(args.log)
    if not log_path.exists():
        print(f"Erro: Arquivo não encontrado: {log_path}")
        return 1

    config = load_config(args.config) if args.config else AnalysisConfig()

    reader = LogReader(strict=not args.lenient)
    events = reader.parse_file(log_path)

    analyzer = ProcessAnalyzer(config)
    discovery, result = analyzer.discover_and_analyze(events, args.strategy)

    if args.json:
        print(json.dumps({
            'discovery': {
                **discovery.metadata(),
                'dfg': discovery.dfg.to_dict(),
                'graph': discovery.graph.to_dict(),
            },
            'analysis': result.to_dict(),
        }, indent=2, default=str))
        return 0

    if reader.errors:
        print(f"{len(reader.errors)} entradas ignoradas")
        print()

    print(discovery)
    print()
    print(result)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nInterrompido pelo usuário")
        sys.exit(130)
    except BPMNAnalyticsError as e:
        print(f"\n\nErro: {e}")
        sys.exit(2)
