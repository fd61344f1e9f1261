"""FAIRsharing metric report: enrich a workbook worklist of test documents.

Each worklist cell points at an RDF test description. The tool fetches it,
extracts the FAIRsharing metric URL and the description, looks the metric name
up on FAIRsharing and writes the joined results back to the workbook.
"""

__version__ = "0.1.0"
