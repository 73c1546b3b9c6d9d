"""
Tests for clause-by-clause document comparison
"""

from conftest import make_clause
from conftest import make_document
from services.data_models import RiskLevel
from services.document_comparator import DocumentComparator


def entry_of(report, clause_type):
    return next(entry for entry in report.clause_by_clause_comparison if entry.clause_type == clause_type)


class TestRentScenario:
    """₹15,000 vs ₹18,000"""

    def setup_method(self):
        doc_a       = make_document([make_clause("The monthly rent is ₹15,000 payable by the 5th.")])
        doc_b       = make_document([make_clause("The monthly rent is ₹18,000 payable by the 5th.")])
        self.report = DocumentComparator().compare(doc_a, doc_b)

    def test_rent_entry(self):
        entry = entry_of(self.report, "Rent")

        assert "₹15,000" in entry.difference_text
        assert "₹18,000" in entry.difference_text
        assert entry.difference_text == "Rent differs: ₹15,000 vs ₹18,000"
        assert entry.plain_english == "Document 1 is cheaper (₹15,000/month) compared to Document 2 (₹18,000/month)."

    def test_side_display_prefix(self):
        entry = entry_of(self.report, "Rent")

        assert entry.side_a.text.startswith("Rent: ₹15,000 - ")
        assert entry.side_b.full_text == "The monthly rent is ₹18,000 payable by the 5th."

    def test_reverse_order(self):
        doc_a  = make_document([make_clause("Rent is ₹18,000 per month.")])
        doc_b  = make_document([make_clause("Rent is ₹15,000 per month.")])
        entry  = entry_of(DocumentComparator().compare(doc_a, doc_b), "Rent")

        assert entry.plain_english == "Document 2 is cheaper (₹15,000/month) compared to Document 1 (₹18,000/month)."

    def test_same_rent(self):
        doc_a  = make_document([make_clause("Rent is ₹15,000 per month.")])
        doc_b  = make_document([make_clause("Monthly rent: Rs. 15000.")])
        entry  = entry_of(DocumentComparator().compare(doc_a, doc_b), "Rent")

        assert entry.difference_text == "Clause content differs between documents"
        assert entry.plain_english == "Both documents have the same rent amount (₹15,000/month)."


class TestPairDiffs:
    """Deposit, notice and text fallbacks"""

    def test_deposit_months(self):
        doc_a = make_document([make_clause("Security deposit equal to 2 months.")])
        doc_b = make_document([make_clause("Security deposit equal to 3 months.")])
        entry = entry_of(DocumentComparator().compare(doc_a, doc_b), "Deposit")

        assert entry.difference_text == "Deposit differs: 2 months vs 3 months"
        assert entry.plain_english == "Document 1 requires lower upfront deposit (2 months) vs Document 2 (3 months)."
        assert entry.side_a.text.startswith("Deposit: 2 months - ")

    def test_notice_in_different_units(self):
        doc_a = make_document([make_clause("Either party may leave with 2 months notice.")])
        doc_b = make_document([make_clause("Either party may leave with 15 days notice.")])
        entry = entry_of(DocumentComparator().compare(doc_a, doc_b), "Notice")

        assert entry.difference_text == "Notice period differs: 2 months vs 15 days"
        assert entry.plain_english == "Document 2 allows quicker exit (15 days notice) compared to Document 1 (2 months)."

    def test_identical_text_different_risk(self):
        doc_a = make_document([make_clause("Pets are not allowed.", risk=RiskLevel.LOW)])
        doc_b = make_document([make_clause("Pets are not allowed.", risk=RiskLevel.HIGH)])
        entry = entry_of(DocumentComparator().compare(doc_a, doc_b), "Pets")

        assert entry.difference_text == "Risk levels differ: Low vs High"
        assert entry.plain_english == "Document 1 has low risk while Document 2 has high risk for this clause."
        assert entry.overall_risk == RiskLevel.HIGH

    def test_identical_clauses(self):
        doc_a = make_document([make_clause("Pets are not allowed.")])
        doc_b = make_document([make_clause("PETS are not allowed.")])
        entry = entry_of(DocumentComparator().compare(doc_a, doc_b), "Pets")

        assert entry.difference_text == "Similar clauses with minor variations"
        assert entry.plain_english == "Both documents have similar terms for this clause."

    def test_entry_risk_is_higher_side(self):
        doc_a = make_document([make_clause("Repair duties lie with the owner.", risk=RiskLevel.MEDIUM)])
        doc_b = make_document([make_clause("Repair duties lie with the occupant.", risk=RiskLevel.LOW)])
        entry = entry_of(DocumentComparator().compare(doc_a, doc_b), "Maintenance")

        assert entry.overall_risk == RiskLevel.MEDIUM


class TestCoverage:
    """Every clause lands in exactly one entry"""

    def test_each_clause_exactly_once(self):
        clauses_a = [make_clause("Rent is ₹15,000."),
                     make_clause("Deposit of 2 months."),
                     make_clause("Rent review every year."),
                     make_clause("Governing law is Indian law.")]
        clauses_b = [make_clause("Monthly rent ₹18,000."),
                     make_clause("No pets allowed."),
                     make_clause("Water charges extra.")]
        report    = DocumentComparator().compare(make_document(clauses_a), make_document(clauses_b))

        seen_a = [entry.side_a.full_text for entry in report.clause_by_clause_comparison if entry.side_a]
        seen_b = [entry.side_b.full_text for entry in report.clause_by_clause_comparison if entry.side_b]

        assert sorted(seen_a) == sorted(clause.clause_text for clause in clauses_a)
        assert sorted(seen_b) == sorted(clause.clause_text for clause in clauses_b)

    def test_one_sided_types_and_residuals(self):
        clauses_a = [make_clause("Rent is ₹15,000."), make_clause("Rent is revised yearly.")]
        clauses_b = [make_clause("Rent is ₹18,000.")]
        report    = DocumentComparator().compare(make_document(clauses_a), make_document(clauses_b))
        types     = [entry.clause_type for entry in report.clause_by_clause_comparison]

        assert types == ["Rent", "Other"]

        residual = report.clause_by_clause_comparison[-1]

        assert residual.side_b is None
        assert residual.difference_text == "Only present in Document 1"
        assert residual.plain_english == "Document 1 has this other clause, but Document 2 doesn't."

    def test_type_found_on_one_side(self):
        doc_a = make_document([make_clause("Rent is ₹15,000.")])
        doc_b = make_document([make_clause("Rent is ₹18,000."), make_clause("No pets allowed.", risk=RiskLevel.MEDIUM)])
        entry = entry_of(DocumentComparator().compare(doc_a, doc_b), "Pets")

        assert entry.side_a is None
        assert entry.difference_text == "Only present in Document 2"
        assert entry.overall_risk == RiskLevel.MEDIUM

    def test_empty_document(self):
        """A document with no clauses degrades to one-sided entries"""
        clauses_b = [make_clause("Rent is ₹18,000."), make_clause("Something unrelated.")]
        report    = DocumentComparator().compare(make_document([]), make_document(clauses_b))

        assert len(report.clause_by_clause_comparison) == 2
        assert all(entry.side_a is None for entry in report.clause_by_clause_comparison)
        assert report.clause_count == {"doc1": 0, "doc2": 2}


class TestSimilarities:
    """Document-level similarities and risk comparison"""

    def test_similarities(self):
        doc_a = make_document([make_clause("The landlord and tenant agree."), make_clause("Parking included.")])
        doc_b = make_document([make_clause("Tenant and landlord sign."), make_clause("Parking is extra.")])
        sims  = DocumentComparator().compare(doc_a, doc_b).detailed_similarities

        assert "Both documents are the same type: rental agreement" in sims
        assert "Both documents have low overall risk level" in sims
        assert "Both agreements mention: landlord, tenant, parking" in sims
        assert "Both documents have similar structure (2 vs 2 clauses)" in sims

    def test_generic_similarity(self):
        doc_a = make_document([make_clause("x", risk=RiskLevel.HIGH)], document_type="loan_contract")
        doc_b = make_document([make_clause("y")] * 5, document_type="rental_agreement")
        sims  = DocumentComparator().compare(doc_a, doc_b).detailed_similarities

        assert sims == ["Both documents are legal agreements with standard terms"]

    def test_high_risk_comparison(self):
        doc_a  = make_document([make_clause("x", risk=RiskLevel.HIGH)])
        doc_b  = make_document([make_clause("y")])
        report = DocumentComparator().compare(doc_a, doc_b)

        assert report.risk_comparison == {"doc1": "High", "doc2": "Low"}
        assert report.differences == ["Document 1 has more high-risk clauses"]
        assert report.recommendations == ["Consider using Document 2 as it has fewer high-risk terms"]

    def test_equal_high_risk(self):
        report = DocumentComparator().compare(make_document([make_clause("x")]), make_document([make_clause("y")]))

        assert report.similarities == ["Both documents have similar risk levels"]
        assert report.differences == []

    def test_to_dict(self):
        report  = DocumentComparator().compare(make_document([make_clause("Rent is ₹15,000.")]),
                                               make_document([make_clause("Rent is ₹18,000.")]))
        payload = report.to_dict()

        assert payload["clause_by_clause_comparison"][0]["clause_type"] == "Rent"
        assert payload["clause_by_clause_comparison"][0]["doc1"]["risk"] == "Low"
        assert payload["clause_count"] == {"doc1": 1, "doc2": 1}
