"""
Load the built-in legal glossary.

    python -m clario.glossary.seed [--database-url URL]

Existing terms are removed first. Each seeded term is then linked to its
neighbours in insertion order as related terms.
"""
import argparse
import logging
import sys

from decouple import config
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clario.database import Base, create_db_engine, create_session_factory
from clario.glossary.models import LegalTerm, legal_term_relations
from clario.models import TermCategory, TermComplexity, UsageFrequency

logger = logging.getLogger(__name__)

LEGAL_TERMS = [
    {
        "term": "indemnification",
        "display_term": "Indemnification",
        "definition": "A contractual obligation where one party agrees to compensate another party for any losses, damages, or expenses that may arise from specified circumstances or actions.",
        "category": TermCategory.LIABILITY,
        "complexity": TermComplexity.INTERMEDIATE,
        "examples": [
            "The contractor shall indemnify the client against any claims arising from the contractor's negligence.",
            "Each party agrees to indemnify the other for any third-party intellectual property claims.",
        ],
        "synonyms": ["hold harmless", "defend", "compensate"],
        "usage_contexts": ["contracts", "agreements", "insurance"],
    },
    {
        "term": "force-majeure",
        "display_term": "Force Majeure",
        "definition": "A contractual clause that excuses a party from performing its obligations when circumstances beyond their control make performance impossible or impracticable.",
        "category": TermCategory.CONTRACT,
        "complexity": TermComplexity.INTERMEDIATE,
        "examples": [
            "The pandemic was declared a force majeure event, excusing delayed delivery.",
            "Natural disasters, war, and government actions are typically included in force majeure clauses.",
        ],
        "synonyms": ["act of god", "impossibility", "frustration"],
        "usage_contexts": ["contracts", "supply agreements", "service agreements"],
    },
    {
        "term": "confidentiality-agreement",
        "display_term": "Confidentiality Agreement",
        "definition": "A legal contract that establishes a confidential relationship between parties and protects sensitive information from being disclosed to third parties.",
        "category": TermCategory.CONTRACT,
        "complexity": TermComplexity.BASIC,
        "examples": [
            "Before discussing the merger, both companies signed confidentiality agreements.",
            "The employee signed a confidentiality agreement to protect trade secrets.",
        ],
        "synonyms": ["non-disclosure agreement", "nda", "secrecy agreement"],
        "usage_contexts": ["employment", "business negotiations", "partnerships"],
    },
    {
        "term": "liability-limitation",
        "display_term": "Liability Limitation",
        "definition": "A contractual provision that restricts or caps the amount of damages one party can recover from another party, often excluding certain types of damages.",
        "category": TermCategory.LIABILITY,
        "complexity": TermComplexity.INTERMEDIATE,
        "examples": [
            "The software license limits liability to the amount paid for the license.",
            "Liability limitation clauses often exclude consequential and indirect damages.",
        ],
        "synonyms": ["liability cap", "damages limitation", "liability exclusion"],
        "usage_contexts": ["software licenses", "service agreements", "product sales"],
    },
    {
        "term": "intellectual-property",
        "display_term": "Intellectual Property",
        "definition": "Intangible assets that are the result of creativity and innovation, including patents, trademarks, copyrights, and trade secrets.",
        "category": TermCategory.INTELLECTUAL_PROPERTY,
        "complexity": TermComplexity.BASIC,
        "examples": [
            "The company's intellectual property portfolio includes 15 patents and 3 trademarks.",
            "Intellectual property rights protect the company's competitive advantage.",
        ],
        "synonyms": ["ip", "intangible assets", "creative works"],
        "usage_contexts": ["business", "technology", "creative industries"],
    },
    {
        "term": "termination-clause",
        "display_term": "Termination Clause",
        "definition": "A contractual provision that specifies the conditions and procedures under which a contract can be ended by either party.",
        "category": TermCategory.CONTRACT,
        "complexity": TermComplexity.BASIC,
        "examples": [
            "The termination clause allows either party to end the agreement with 30 days notice.",
            "Material breach of contract triggers immediate termination rights.",
        ],
        "synonyms": ["cancellation clause", "exit clause", "termination provision"],
        "usage_contexts": ["employment", "service agreements", "partnerships"],
    },
    {
        "term": "due-diligence",
        "display_term": "Due Diligence",
        "definition": "The comprehensive investigation and analysis of a business, property, or investment opportunity before entering into a transaction.",
        "category": TermCategory.CORPORATE,
        "complexity": TermComplexity.INTERMEDIATE,
        "examples": [
            "The buyer conducted due diligence before acquiring the company.",
            "Due diligence revealed several undisclosed liabilities in the target company.",
        ],
        "synonyms": ["investigation", "analysis", "review"],
        "usage_contexts": ["mergers", "acquisitions", "investments"],
    },
    {
        "term": "non-compete-agreement",
        "display_term": "Non-Compete Agreement",
        "definition": "A contractual restriction that prevents an employee or contractor from competing with their employer or client for a specified period and within a defined geographic area.",
        "category": TermCategory.EMPLOYMENT,
        "complexity": TermComplexity.INTERMEDIATE,
        "examples": [
            "The executive signed a non-compete agreement preventing employment with competitors for 2 years.",
            "Non-compete agreements must be reasonable in scope and duration to be enforceable.",
        ],
        "synonyms": ["non-competition clause", "restrictive covenant", "competition restriction"],
        "usage_contexts": ["employment", "business sales", "partnerships"],
    },
    {
        "term": "material-breach",
        "display_term": "Material Breach",
        "definition": "A significant violation of contract terms that goes to the heart of the agreement and gives the non-breaching party the right to terminate the contract.",
        "category": TermCategory.CONTRACT,
        "complexity": TermComplexity.INTERMEDIATE,
        "examples": [
            "Failure to deliver goods on time constituted a material breach of the supply agreement.",
            "A material breach allows the injured party to seek damages and terminate the contract.",
        ],
        "synonyms": ["substantial breach", "fundamental breach", "serious breach"],
        "usage_contexts": ["contract disputes", "termination", "litigation"],
    },
    {
        "term": "arbitration",
        "display_term": "Arbitration",
        "definition": "A method of dispute resolution where parties submit their dispute to a neutral third party (arbitrator) who makes a binding decision.",
        "category": TermCategory.LITIGATION,
        "complexity": TermComplexity.BASIC,
        "examples": [
            "The contract requires arbitration instead of court litigation for disputes.",
            "Arbitration is often faster and more confidential than traditional litigation.",
        ],
        "synonyms": ["alternative dispute resolution", "adr", "binding arbitration"],
        "usage_contexts": ["contracts", "dispute resolution", "commercial agreements"],
    },
    {
        "term": "governing-law",
        "display_term": "Governing Law",
        "definition": "A contractual provision that specifies which jurisdiction's laws will be used to interpret and enforce the contract.",
        "category": TermCategory.CONTRACT,
        "complexity": TermComplexity.BASIC,
        "examples": [
            "The governing law clause specifies that New York law will apply to this agreement.",
            "Governing law clauses help avoid conflicts between different legal systems.",
        ],
        "synonyms": ["choice of law", "applicable law", "jurisdiction clause"],
        "usage_contexts": ["international contracts", "cross-border agreements", "commercial contracts"],
    },
    {
        "term": "severability-clause",
        "display_term": "Severability Clause",
        "definition": "A contractual provision that ensures if one part of the contract is found to be invalid or unenforceable, the rest of the contract remains in effect.",
        "category": TermCategory.CONTRACT,
        "complexity": TermComplexity.BASIC,
        "examples": [
            "The severability clause protects the contract if any provision is deemed unenforceable.",
            "Without a severability clause, an invalid provision could void the entire contract.",
        ],
        "synonyms": ["savings clause", "separability clause", "validity clause"],
        "usage_contexts": ["all contracts", "risk management", "contract protection"],
    },
]


def seed_glossary(db: Session) -> int:
    """Replace all glossary terms with the built-in set and return how many were created."""
    db.execute(legal_term_relations.delete())
    removed = db.query(LegalTerm).delete(synchronize_session=False)
    logger.info(f"Cleared {removed} existing legal terms")

    created = [
        LegalTerm(usage_frequency=UsageFrequency.COMMON, antonyms=[], legal_references=[], translations=[], **data)
        for data in LEGAL_TERMS
    ]
    db.add_all(created)
    db.flush()

    for i, term in enumerate(created):
        neighbours = []
        if i > 0:
            neighbours.append(created[i - 1])
        if i < len(created) - 1:
            neighbours.append(created[i + 1])
        term.related_terms = neighbours

    db.commit()
    logger.info(f"Created {len(created)} legal terms and linked related terms")
    return len(created)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the Clario legal glossary")
    parser.add_argument(
        "--database-url",
        default=config("DATABASE_URL", default=None),
        help="Database to seed (defaults to DATABASE_URL)"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not args.database_url:
        parser.error("no database given: pass --database-url or set DATABASE_URL")

    engine = create_db_engine(args.database_url)
    Base.metadata.create_all(bind=engine)
    db = create_session_factory(engine)()
    try:
        seed_glossary(db)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error seeding glossary: {str(e)}")
        return 1
    finally:
        db.close()

    logger.info("Glossary seeding completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
