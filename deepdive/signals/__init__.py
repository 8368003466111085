"""
Signal engine: turns search results into scored, ranked records and a batch
report. Apart from ``load_lexicon()`` nothing here touches files, the network
or a database.

Modules
-------
lexicon    : LexiconEntry + SignalLexicon + DEFAULT_LEXICON + load_lexicon().
analyzer   : analyze_signals() - one (title, description) pair -> SignalAnalysis.
ranker     : score_results() + rank_results() - batch scoring, stable ordering.
aggregator : aggregate_report() + count_signals() + determine_recommendation().
"""
