"""
Core of the validation engine: rule models, rule-family validators and the
parser/engine that ties them together.
"""
